"""
Tests for period/generator extraction and rank-prefix compression.
"""

from fractions import Fraction
from math import log

import numpy as np
import pytest

from temper import FreeBasis, InputError, Subgroup, Temperament
from temper.basis import dot, fraction_to_monzo, nats_to_cents
from temper.core.structure import expand_prefix


def assert_generator(mapping, generator, expected, period=1200.0):
    """Tuned generator matches `expected` up to octave reduction and inversion."""
    size = nats_to_cents(dot(mapping, generator)) % period
    target = expected % period
    assert size == pytest.approx(target, abs=1e-3) or size == pytest.approx(period - target, abs=1e-3)


class TestDivisionsGenerator:
    """Rank-2 period and generator."""

    def test_meantone(self):
        temperament = Temperament.from_commas([fraction_to_monzo("81/80")])
        divisions, generator = temperament.divisions_generator()

        assert divisions == 1
        assert len(generator) == 3
        assert_generator(temperament.pote(), generator, 696.239)

    def test_orgone(self):
        temperament = Temperament.from_commas([fraction_to_monzo(Fraction(65536, 65219))])
        divisions, generator = temperament.divisions_generator()

        assert divisions == 1
        assert len(generator) == 3
        assert_generator(temperament.pote(), generator, 323.372)

    def test_blackwood(self):
        temperament = Temperament.from_commas([[8, -5, 0]], Subgroup(5))
        divisions, generator = temperament.divisions_generator()

        assert divisions == 5
        assert len(generator) == 3
        assert_generator(temperament.pote(), generator, 399.594, period=240.0)

    def test_augmented(self):
        temperament = Temperament.from_commas(["128/125"], Subgroup(5))
        divisions, generator = temperament.divisions_generator()

        assert divisions == 3
        assert_generator(temperament.pote(), generator, 706.638, period=400.0)

    def test_miracle(self):
        temperament = Temperament.from_commas(["225/224", "1029/1024"])
        divisions, generator = temperament.divisions_generator()

        assert divisions == 1
        assert len(generator) == 4
        assert_generator(temperament.pote(), generator, 116.675)

    def test_pinkan(self):
        subgroup = Subgroup("2.3.13/5.19/5")
        commas = [subgroup.to_monzo_and_residual(c)[0] for c in ("676/675", "1216/1215")]
        temperament = Temperament.from_commas(commas, subgroup)
        divisions, generator = temperament.divisions_generator()

        assert divisions == 1
        assert_generator(temperament.pote(), generator, 248.868)

    def test_free_basis_barbados(self):
        free = FreeBasis([log(2), log(3), log(13 / 5)])
        temperament = Temperament.from_commas([[2, -3, 2]], free)
        divisions, generator = temperament.divisions_generator()

        assert divisions == 1
        assert_generator(temperament.pote(), generator, 248.621)

    def test_generator_is_independent_of_scale(self):
        """Works on the canonical form even when the receiver is not canonical."""
        temperament = Temperament([0, 0, 0, 0, -3, -12, -12, 0], 5)
        assert temperament.divisions_generator()[0] == 1

    def test_rank_3_rejected(self):
        with pytest.raises(InputError):
            Temperament.from_commas(["225/224"]).divisions_generator()


class TestPeriodGenerators:
    """Extraction at any rank."""

    def test_equal_temperament(self):
        pairs = Temperament.from_vals([12], 5).period_generators()
        assert len(pairs) == 1
        divisions, generator = pairs[0]
        assert divisions == 12
        assert generator.tolist() == [1, 0, 0]

    def test_rank_3(self):
        marvel = Temperament.from_commas(["225/224"])
        pairs = marvel.period_generators()
        assert len(pairs) == 3
        assert pairs[0][0] == 1
        assert all(len(generator) == 4 for _, generator in pairs)

    def test_generators_span_the_temperament(self):
        """Projecting the generators through the wedgie leaves a unit."""
        marvel = Temperament.from_commas(["225/224"]).canonize()
        algebra = marvel.algebra
        blade = marvel.value
        for divisions, generator in marvel.period_generators():
            blade = algebra.lcontract(algebra.vector(generator), blade) // divisions
        assert abs(blade[0]) == 1

    def test_just_intonation(self):
        pairs = Temperament.from_commas([], 5).period_generators()
        assert [d for d, _ in pairs] == [1, 1, 1]

    def test_rank_0(self):
        assert Temperament.from_vals([], 5).period_generators() == []


class TestRankPrefix:
    """Compression to the components containing the equave."""

    def test_semaphore(self):
        temperament = Temperament.from_commas([fraction_to_monzo(Fraction(49, 48))]).canonize()
        assert len(temperament.basis) == 3
        prefix = temperament.rank_prefix(2)
        assert prefix.tolist() == [2, 1]

        recovered = Temperament.from_prefix(2, prefix, Subgroup("2.3.7")).canonize()
        assert temperament.equals(recovered)

    def test_miracle(self):
        temperament = Temperament.from_commas(["225/224", "1029/1024"]).canonize()
        prefix = temperament.rank_prefix(2)
        assert prefix.tolist() == [6, -7, -2]

        recovered = Temperament.from_prefix(2, prefix, temperament.basis).canonize()
        assert temperament.equals(recovered)

    def test_augmented(self):
        temperament = Temperament.from_commas([fraction_to_monzo(Fraction(128, 125))], Subgroup(5)).canonize()
        prefix = temperament.rank_prefix(2)
        assert prefix.tolist() == [3, 0]

        recovered = Temperament.from_prefix(2, prefix, Subgroup(5)).canonize()
        assert temperament.equals(recovered)

    def test_default_rank(self):
        temperament = Temperament.from_commas(["81/80"]).canonize()
        assert temperament.rank_prefix().tolist() == [1, 4]

    @pytest.mark.parametrize("commas", [
        ["225/224"],              # marvel, rank 3
        ["385/384"],              # keenanismic, rank 4
        ["81/80", "126/125"],     # septimal meantone, rank 2
    ])
    def test_roundtrip(self, commas):
        temperament = Temperament.from_commas(commas).canonize()
        rank = temperament.rank
        recovered = Temperament.from_prefix(rank, temperament.rank_prefix(rank), temperament.basis).canonize()
        assert temperament.equals(recovered)

    def test_free_basis_barbados(self):
        free = FreeBasis([log(2), log(3), log(13 / 5)])
        temperament = Temperament.from_commas([[2, -3, 2]], free).canonize()
        recovered = Temperament.from_prefix(2, temperament.rank_prefix(2), free).canonize()
        assert temperament.equals(recovered)

    def test_equal_temperament(self):
        et = Temperament.from_vals([12], 5).canonize()
        assert et.rank_prefix().tolist() == [12]
        assert Temperament.from_prefix(1, [12], 5).canonize().equals(et)

    def test_wrong_length(self):
        with pytest.raises(InputError, match="needs 2 entries"):
            expand_prefix(2, [1, 4, 4], np.log([2, 3, 5]))

    def test_rank_out_of_range(self):
        with pytest.raises(InputError):
            Temperament.from_prefix(4, [1], 5)
