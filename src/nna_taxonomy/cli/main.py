"""``nna-taxonomy`` command-line entry point.

Usage:
    nna-taxonomy convert S.POP.HPM.001
    nna-taxonomy convert 2.001.007.001 --to hfn
    nna-taxonomy format W STG FES 001 --to mfa
    nna-taxonomy validate --taxonomy my_taxonomy.json
    nna-taxonomy mappings G
    nna-taxonomy list S POP

Every subcommand accepts ``--config`` (Python file with a CONFIG dict),
``--taxonomy`` and ``-v``.
"""

import sys
import json
import argparse
import logging
from typing import List, Optional

from pydantic import ValidationError

from nna_taxonomy.contracts import ContractViolation
from nna_taxonomy.mapping import AddressFormat, TaxonomyMapper, classify
from nna_taxonomy.cli.run_mapper import load_mapper

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def _cmd_convert(mapper: TaxonomyMapper, args) -> int:
    address = args.address.strip()
    target = args.to
    if target is None:
        # direction follows the form of the layer segment
        target = "hfn" if classify(address.split(".")[0]).is_numeric else "mfa"

    if target == AddressFormat.HFN.value:
        result = mapper.convert_mfa_to_hfn(address)
    else:
        result = mapper.convert_hfn_to_mfa(address, require_sequential=not args.lenient)

    print(result)
    if not result or result == address:
        logger.error("Conversion failed for %r", address)
        return EXIT_FAILED
    return EXIT_OK


def _cmd_format(mapper: TaxonomyMapper, args) -> int:
    result = mapper.format_address(args.layer, args.category, args.subcategory, args.sequential, args.to)
    print(result)
    return EXIT_OK if result else EXIT_FAILED


def _cmd_validate(mapper: TaxonomyMapper, args) -> int:
    problems = list(mapper.issues)
    problems.extend(f"Round-trip failure: {hfn}" for hfn in mapper.round_trip_failures())

    counts = mapper.table.counts()
    print(f"Taxonomy version {mapper.table.version}: "
          f"{sum(c['categories'] for c in counts.values())} categories, "
          f"{sum(c['subcategories'] for c in counts.values())} subcategories, "
          f"{len(mapper.overrides)} overrides")
    for problem in problems:
        print(f"  - {problem}")
    if problems:
        print(f"{len(problems)} issue(s) found")
        return EXIT_FAILED
    print("No issues found")
    return EXIT_OK


def _cmd_mappings(mapper: TaxonomyMapper, args) -> int:
    rows = mapper.generate_all_mappings(args.layer, sequential=args.sequential)
    print(json.dumps([row.model_dump() for row in rows], indent=2))
    return EXIT_OK if rows else EXIT_FAILED


def _cmd_list(mapper: TaxonomyMapper, args) -> int:
    if args.layer is None:
        counts = mapper.table.counts()
        for layer in mapper.get_layers():
            print(f"{layer.code}  {layer.numeric_code:>2}  {layer.name}  "
                  f"({counts[layer.code]['categories']} categories)")
        return EXIT_OK

    if args.category is None:
        items = mapper.get_categories(args.layer)
    else:
        items = mapper.get_subcategories(args.layer, args.category)
    for item in items:
        print(f"{item.code:<4} {item.numeric_code}  {item.name}")
    return EXIT_OK if items else EXIT_FAILED


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Path to user config file (Python file with CONFIG dict)")
    common.add_argument("--taxonomy", help="Path to a taxonomy JSON document")
    common.add_argument("--no-cache", action="store_true", help="Disable lookup memoization")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(
        prog="nna-taxonomy",
        description="Convert NNA asset addresses between HFN and MFA form",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("convert", parents=[common], help="Convert an HFN to MFA or back")
    p.add_argument("address", help="HFN (S.POP.HPM.001) or MFA (2.001.007.001)")
    p.add_argument("--to", choices=["hfn", "mfa"], help="Target form (default: the opposite form)")
    p.add_argument("--lenient", action="store_true", help="Accept HFNs without a sequential segment")
    p.set_defaults(func=_cmd_convert)

    p = sub.add_parser("format", parents=[common], help="Assemble an address from components")
    p.add_argument("layer")
    p.add_argument("category")
    p.add_argument("subcategory")
    p.add_argument("sequential")
    p.add_argument("--to", choices=["hfn", "mfa"], default="hfn", help="Target form")
    p.set_defaults(func=_cmd_format)

    p = sub.add_parser("validate", parents=[common], help="Report taxonomy and override issues")
    p.set_defaults(func=_cmd_validate)

    p = sub.add_parser("mappings", parents=[common], help="Print every HFN/MFA pair of a layer as JSON")
    p.add_argument("layer")
    p.add_argument("--sequential", default="001")
    p.set_defaults(func=_cmd_mappings)

    p = sub.add_parser("list", parents=[common], help="List layers, categories or subcategories")
    p.add_argument("layer", nargs="?")
    p.add_argument("category", nargs="?")
    p.set_defaults(func=_cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        mapper = load_mapper(
            args.config,
            cli_args={"taxonomy_path": args.taxonomy, "no_cache": args.no_cache or None},
            verbose=args.verbose,
        )
    except (FileNotFoundError, ValueError, ValidationError, ContractViolation) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return args.func(mapper, args)


if __name__ == "__main__":
    sys.exit(main())
