"""
TEMPER Command Line Interface

Usage:
    python -m temper <command> [args]

Commands:
    show        Wedgie, optimal mapping and generators of a temperament
    factor      Equal temperaments whose wedge gives the temperament
    lattice     Meet or join of two temperaments

Examples:
    python -m temper show --commas 81/80
    python -m temper show --vals 12 19 --subgroup 5 --tuning te
    python -m temper show --commas 81/80 --tuning cte --eigenmonzo 2 --eigenmonzo 5/4
    python -m temper show --commas 676/675 --subgroup 2.3.13/5
    python -m temper factor --commas 225/224 1029/1024
    python -m temper lattice --commas 81/80 --other-commas 126/125 --subgroup 7

Tokens:
    commas      rationals (81/80) or comma-separated monzos (-4,4,-1)
    vals        wart tokens (12, 12e) or comma-separated vals (12,19,28)
    subgroup    a prime limit (7) or dot-separated generators (2.3.13/5)
"""

import argparse
import logging
import sys
from typing import List, Optional

from temper.basis.subgroup import Subgroup
from temper.config import load_config, using_config
from temper.core.temperament import Temperament
from temper.io.format import (
    format_generators,
    format_mapping,
    format_val,
    format_wedgie,
)
from temper.validation.errors import InputError, TemperamentError

logger = logging.getLogger(__name__)


def _parse_subgroup(token: Optional[str]) -> Optional[Subgroup]:
    if token is None:
        return None
    if token.isdigit():
        return Subgroup(int(token))
    return Subgroup(token)


def _parse_vector(token: str) -> List[int]:
    try:
        return [int(part) for part in token.split(",")]
    except ValueError:
        raise InputError(f"Malformed integer vector {token!r}") from None


def _parse_interval(token: str):
    return _parse_vector(token) if "," in token else token


def build_temperament(args) -> Temperament:
    """Temperament from the --commas / --vals / --subgroup options."""
    subgroup = _parse_subgroup(args.subgroup)
    if args.commas is not None and args.vals is not None:
        raise InputError("Give either --commas or --vals, not both")
    if args.vals is not None:
        vals = [_parse_vector(v) if "," in v else v for v in args.vals]
        return Temperament.from_vals(vals, subgroup)
    commas = [_parse_interval(c) for c in (args.commas or [])]
    return Temperament.from_commas(commas, subgroup)


def cmd_show(args) -> int:
    """Print wedgie, tuning and generators."""
    temperament = build_temperament(args).canonize()
    print(f"Basis:    {temperament.basis}")
    print(f"Rank:     {temperament.rank}")
    print(f"Wedgie:   {format_wedgie(temperament)}")

    if args.tuning == 'cte':
        eigenmonzos = [_parse_interval(e) for e in (args.eigenmonzo or [])]
        mapping = temperament.cte(eigenmonzos, weights=args.weights)
    elif args.tuning == 'te':
        mapping = temperament.tenney_euclid(weights=args.weights)
    else:
        mapping = temperament.pote(weights=args.weights)
    print(f"{args.tuning.upper():<5}     {format_mapping(mapping)}")

    if temperament.rank > 0:
        print("Generators:")
        for line in format_generators(temperament.period_generators(), mapping):
            print(f"    {line}")
    return 0


def cmd_factor(args) -> int:
    """Print a generating set of vals."""
    temperament = build_temperament(args)
    vals = temperament.factorize(args.max_divisions, args.wart_radius)
    for val in vals:
        print(f"{temperament.basis.to_warts(val):<8} {format_val(val)}")
    return 0


_LATTICE_OPERATIONS = {
    'val-join': Temperament.val_join,
    'val-meet': Temperament.val_meet,
    'kernel-join': Temperament.kernel_join,
    'kernel-meet': Temperament.kernel_meet,
}


def cmd_lattice(args) -> int:
    """Print the meet or join of two temperaments over one subgroup."""
    if args.subgroup is None:
        raise InputError("lattice needs --subgroup so both temperaments share a basis")
    first = build_temperament(args)
    second = build_temperament(argparse.Namespace(
        commas=args.other_commas, vals=args.other_vals, subgroup=args.subgroup,
    ))
    result = _LATTICE_OPERATIONS[args.operation](first, second)
    print(f"Basis:    {result.basis}")
    print(f"Rank:     {result.rank}")
    print(f"Wedgie:   {format_wedgie(result)}")
    return 0


def _add_temperament_options(parser: argparse.ArgumentParser):
    parser.add_argument('--commas', '-c', nargs='+', default=None,
                        help='Commas to temper out')
    parser.add_argument('--vals', nargs='+', default=None,
                        help='Vals supported by the temperament')
    parser.add_argument('--subgroup', '-s', default=None,
                        help='Prime limit or dot-separated subgroup (inferred from commas if omitted)')


def main(argv: Optional[List[str]] = None) -> int:
    """TEMPER CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='temper',
        description='Regular temperaments in geometric algebra',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Quick start:
    temper show --commas 81/80                 # meantone
    temper show --commas 225/224 1029/1024     # miracle
    temper factor --commas 81/80               # 5 & 7
        """,
    )
    parser.add_argument('--config', default=None, help='YAML file overriding the packaged defaults')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    show_parser = subparsers.add_parser('show', help='Wedgie, tuning and generators')
    _add_temperament_options(show_parser)
    show_parser.add_argument('--tuning', '-t', choices=['te', 'pote', 'cte'], default='pote',
                             help='Tuning optimization (default: pote)')
    show_parser.add_argument('--eigenmonzo', '-e', action='append', default=None,
                             help='Interval kept pure by --tuning cte (repeatable)')
    show_parser.add_argument('--weights', '-w', choices=['tenney', 'flat'], default=None,
                             help='Tuning weights (default: tenney)')

    factor_parser = subparsers.add_parser('factor', help='Generating set of equal temperaments')
    _add_temperament_options(factor_parser)
    factor_parser.add_argument('--max-divisions', type=int, default=None,
                               help='Largest equal division searched')
    factor_parser.add_argument('--wart-radius', type=int, default=None,
                               help='Largest step deviation from patent vals')

    lattice_parser = subparsers.add_parser('lattice', help='Meet or join of two temperaments')
    _add_temperament_options(lattice_parser)
    lattice_parser.add_argument('--other-commas', nargs='+', default=None,
                                help='Commas of the second temperament')
    lattice_parser.add_argument('--other-vals', nargs='+', default=None,
                                help='Vals of the second temperament')
    lattice_parser.add_argument('--operation', '-o', choices=sorted(_LATTICE_OPERATIONS), default='kernel-join',
                                help='Lattice operation (default: kernel-join)')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        with using_config(load_config(args.config)):
            if args.command == 'show':
                return cmd_show(args)
            if args.command == 'factor':
                return cmd_factor(args)
            if args.command == 'lattice':
                return cmd_lattice(args)
    except TemperamentError as e:
        print(f"ERROR: {e}")
        return 1

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
