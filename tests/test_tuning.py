"""
Tests for TE, POTE and CTE tunings.

Reference values are the published POTE tunings of each temperament.
"""

from fractions import Fraction
from math import log

import numpy as np
import pytest

from temper import ConvergenceError, FreeBasis, InputError, Subgroup, Temperament
from temper.basis import dot, fraction_to_monzo, fraction_to_monzo_and_residual, nats_to_cents
from temper.core.tuning import flat_weights, resolve_weights, tenney_weights


def cents(mapping, monzo):
    return nats_to_cents(dot(mapping, monzo))


OCTAVE_3 = [1, 0, 0]
FIFTH_3 = [-1, 1, 0]
SYNTONIC = [-4, 4, -1]


class TestWeights:
    """Metric selection."""

    def test_tenney(self):
        np.testing.assert_allclose(tenney_weights(Subgroup(5)), 1 / np.log([2, 3, 5]))

    def test_flat(self):
        assert flat_weights(Subgroup(7)).tolist() == [1.0, 1.0, 1.0, 1.0]

    def test_resolve(self):
        subgroup = Subgroup(5)
        np.testing.assert_allclose(resolve_weights(subgroup), tenney_weights(subgroup))
        np.testing.assert_allclose(resolve_weights(subgroup, "flat"), [1, 1, 1])
        np.testing.assert_allclose(resolve_weights(subgroup, [1, 2, 3]), [1, 2, 3])

    def test_basis_weights_override(self):
        subgroup = Subgroup(5, weights=[1.0, 2.0, 3.0])
        np.testing.assert_allclose(resolve_weights(subgroup), [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("weights", ["bogus", [1.0, -1.0, 1.0], [1.0, 1.0]])
    def test_invalid(self, weights):
        with pytest.raises(InputError):
            resolve_weights(Subgroup(5), weights)


class TestPOTE:
    """Pure-equave Tenney-Euclidean tunings."""

    def test_meantone_from_vals(self):
        temperament = Temperament.from_vals([[12, 19, 28], [19, 30, 44]], Subgroup([2, 3, 5]))
        meantone = temperament.pote()

        assert dot(meantone, SYNTONIC) == pytest.approx(0, abs=1e-9)
        assert dot(meantone, OCTAVE_3) == pytest.approx(log(2))
        assert cents(meantone, FIFTH_3) == pytest.approx(696.239, abs=1e-3)

    def test_meantone_from_commas(self):
        meantone = Temperament.from_commas([SYNTONIC], Subgroup(5)).pote()

        assert dot(meantone, SYNTONIC) == pytest.approx(0, abs=1e-9)
        assert dot(meantone, OCTAVE_3) == pytest.approx(log(2))
        assert cents(meantone, FIFTH_3) == pytest.approx(696.239, abs=1e-3)

    def test_miracle(self):
        marvel = fraction_to_monzo("225/224")
        gamelisma = fraction_to_monzo("1029/1024")
        large_secor = fraction_to_monzo("15/14")
        small_secor = fraction_to_monzo_and_residual(Fraction(16, 15), 4)[0]

        for temperament in [Temperament.from_commas([marvel, gamelisma], 7), Temperament.from_vals([10, 21], 7)]:
            miracle = temperament.pote()
            assert dot(miracle, marvel) == pytest.approx(0, abs=1e-9)
            assert dot(miracle, gamelisma) == pytest.approx(0, abs=1e-9)
            assert dot(miracle, [1, 0, 0, 0]) == pytest.approx(log(2))
            assert cents(miracle, small_secor) == pytest.approx(116.675, abs=1e-3)
            assert cents(miracle, large_secor) == pytest.approx(116.675, abs=1e-3)

    def test_orgone_prime_mapping(self):
        """Inferred 2.7.11 subgroup lifted back to a full 11-limit mapping."""
        orgonisma = fraction_to_monzo(Fraction(65536, 65219))
        smitone = fraction_to_monzo(Fraction(77, 64))

        from_commas = Temperament.from_commas(["65536/65219"])
        subgroup = Subgroup("2.7.11")
        from_vals = Temperament.from_vals([subgroup.patent_val(11), subgroup.patent_val(18)], subgroup)

        for temperament in [from_commas, from_vals]:
            orgone = temperament.pote(prime_mapping=True)
            assert len(orgone) == 5
            assert dot(orgone, orgonisma) == pytest.approx(0, abs=1e-9)
            assert dot(orgone, [1, 0, 0, 0, 0]) == pytest.approx(log(2))
            assert cents(orgone, smitone) == pytest.approx(323.372, abs=1e-3)

    def test_blackwood_2_3(self):
        blackwood = Temperament.from_commas([Fraction(256, 243)]).pote()
        assert len(blackwood) == 2
        assert dot(blackwood, [-1, 1]) == pytest.approx(3 * log(2) / 5)

    def test_blackwood_2_3_5(self):
        subgroup = Subgroup(5)
        limma = subgroup.to_monzo_and_residual(Fraction(256, 243))[0]
        blackwood = Temperament.from_commas([limma], subgroup).pote()

        assert len(blackwood) == 3
        assert dot(blackwood, FIFTH_3) == pytest.approx(3 * log(2) / 5)
        assert cents(blackwood, [-2, 0, 1]) == pytest.approx(399.594, abs=1e-3)

    def test_arcturus_3_5_7(self):
        temperament = Temperament.from_commas([(15625, 15309)])
        arcturus = temperament.pote()
        major_sixth = temperament.basis.to_monzo_and_residual(Fraction(5, 3))[0]

        assert str(temperament.basis) == "3.5.7"
        assert len(arcturus) == 3
        assert cents(arcturus, major_sixth) == pytest.approx(878.042, abs=1e-3)

    def test_marvel_rank_3(self):
        marvel = Temperament.from_commas(["225/224"]).pote()
        fifth = fraction_to_monzo_and_residual(Fraction(3, 2), 4)[0]
        major_third = fraction_to_monzo_and_residual(Fraction(5, 4), 4)[0]

        assert len(marvel) == 4
        assert cents(marvel, fifth) == pytest.approx(700.4075, abs=1e-3)
        assert cents(marvel, major_third) == pytest.approx(383.6376, abs=1e-3)

    def test_keenanismic_rank_4(self):
        keenanisma = fraction_to_monzo(Fraction(385, 384))
        for temperament in [Temperament.from_commas([keenanisma]), Temperament.from_vals([9, 10, "12e", 15], 11)]:
            keenanismic = temperament.pote()
            assert len(keenanismic) == 5
            assert dot(keenanismic, keenanisma) == pytest.approx(0, abs=1e-9)

    def test_pinkan_non_orthogonal_subgroup(self):
        subgroup = Subgroup("2.3.13/5.19/5")
        island = subgroup.to_monzo_and_residual("676/675")[0]
        password = subgroup.to_monzo_and_residual("1216/1215")[0]
        pinkan = Temperament.from_commas([island, password], subgroup).pote()
        semifourth = subgroup.to_monzo_and_residual(Fraction(15, 13))[0]

        assert dot(pinkan, island) == pytest.approx(0, abs=1e-9)
        assert dot(pinkan, password) == pytest.approx(0, abs=1e-9)
        assert dot(pinkan, [1, 0, 0, 0]) == pytest.approx(log(2))
        assert cents(pinkan, semifourth) == pytest.approx(248.868, abs=1e-3)

    def test_free_basis_meantone(self):
        free = FreeBasis(np.log([2, 3, 5]))
        meantone = Temperament.from_vals([[12, 19, 28], [19, 30, 44]], free).pote()
        assert dot(meantone, OCTAVE_3) == pytest.approx(log(2))
        assert cents(meantone, FIFTH_3) == pytest.approx(696.239, abs=1e-3)

    def test_free_basis_barbados(self):
        free = FreeBasis([log(2), log(3), log(13 / 5)])
        barbados = Temperament.from_commas([[2, -3, 2]], free).pote()
        assert dot(barbados, [2, -3, 2]) == pytest.approx(0, abs=1e-9)
        assert cents(barbados, [0, 1, -1]) == pytest.approx(248.621, abs=1e-3)

    def test_free_basis_has_no_prime_mapping(self):
        free = FreeBasis(np.log([2, 3, 5]))
        with pytest.raises(InputError):
            Temperament.from_commas([SYNTONIC], free).pote(prime_mapping=True)


class TestTE:
    """Unconstrained Tenney-Euclidean tunings."""

    def test_rank_0_is_just(self):
        trivial = Temperament.from_vals([], Subgroup(5)).tenney_euclid()
        np.testing.assert_allclose(trivial, np.log([2, 3, 5]))

    def test_no_commas_is_just(self):
        just = Temperament.from_commas([], 5).tenney_euclid()
        np.testing.assert_allclose(just, np.log([2, 3, 5]))

    def test_starling_from_comma(self):
        temperament = Temperament.from_commas([fraction_to_monzo(Fraction(126, 125))])
        starling = temperament.tenney_euclid()
        quarter_tone = fraction_to_monzo(Fraction(36, 35))
        jubilisma = fraction_to_monzo(Fraction(50, 49))

        assert len(starling) == 4
        assert dot(starling, quarter_tone) == pytest.approx(dot(starling, jubilisma))
        assert 1199 < cents(starling, [1, 0, 0, 0]) < 1200

    def test_starling_from_vals(self):
        subgroup = Subgroup(7)
        vals = [subgroup.patent_val(d) for d in (12, 27, 31)]
        starling = Temperament.from_vals(vals, subgroup).tenney_euclid()
        comma = fraction_to_monzo(Fraction(126, 125))

        assert dot(starling, comma) == pytest.approx(0, abs=1e-9)
        assert 1199 < cents(starling, [1, 0, 0, 0]) < 1200
        for val in vals:
            assert dot(val, comma) == 0

    def test_flat_weights_keep_kernel(self):
        meantone = Temperament.from_commas(["81/80"])
        flat = meantone.tenney_euclid(weights="flat")
        assert dot(flat, SYNTONIC) == pytest.approx(0, abs=1e-9)
        assert not np.allclose(flat, meantone.tenney_euclid())

    def test_nil_has_no_tuning(self):
        with pytest.raises(InputError):
            Temperament(np.zeros(8, dtype=np.int64), 5).tenney_euclid()


class TestCTE:
    """Tunings with pure eigenmonzos."""

    def test_quarter_comma_meantone(self):
        """Pure octave and pure major third give quarter-comma meantone."""
        meantone = Temperament.from_commas(["81/80"])
        mapping = meantone.cte(["2", "5/4"])

        assert dot(mapping, OCTAVE_3) == pytest.approx(log(2))
        assert dot(mapping, [-2, 0, 1]) == pytest.approx(log(5 / 4))
        assert dot(mapping, SYNTONIC) == pytest.approx(0, abs=1e-9)
        assert cents(mapping, FIFTH_3) == pytest.approx(696.578, abs=1e-3)

    def test_pure_octave(self):
        meantone = Temperament.from_commas(["81/80"])
        mapping = meantone.cte([[1, 0, 0]])
        assert dot(mapping, OCTAVE_3) == pytest.approx(log(2))
        assert dot(mapping, SYNTONIC) == pytest.approx(0, abs=1e-9)
        assert 696.0 < cents(mapping, FIFTH_3) < 698.0

    def test_pure_octave_rank_1(self):
        """For an equal temperament a pure octave leaves no freedom."""
        et12 = Temperament.from_vals([12], 5)
        mapping = et12.cte(["2"])
        np.testing.assert_allclose(mapping, np.array([12, 19, 28]) * log(2) / 12)

    def test_no_eigenmonzos_is_te(self):
        meantone = Temperament.from_commas(["81/80"])
        np.testing.assert_allclose(meantone.cte([]), meantone.tenney_euclid())

    def test_over_constrained(self):
        meantone = Temperament.from_commas(["81/80"])
        with pytest.raises(ConvergenceError, match="over-constrain"):
            meantone.cte(["2", "3", "5"])

    def test_tempered_out_eigenmonzo(self):
        meantone = Temperament.from_commas(["81/80"])
        with pytest.raises(ConvergenceError) as info:
            meantone.cte(["81/80"])
        assert info.value.parameter == "eigenmonzos"

    def test_prime_mapping(self):
        orgone = Temperament.from_commas(["65536/65219"])
        mapping = orgone.cte(["2"], prime_mapping=True)
        assert len(mapping) == 5
        assert mapping[0] == pytest.approx(log(2))
