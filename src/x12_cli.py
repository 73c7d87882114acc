"""
X12 Parser Command Line Tool

Parses an X12 interchange file into its Interchange / FunctionalGroup /
TransactionSet tree and writes the tree as JSON.

Usage:
    x12-parse invoice.edi                       # Parse invoice.edi -> invoice.json
    x12-parse invoice.edi output.json           # Parse to a specific output file
    x12-parse invoice.edi -                     # Write JSON to stdout
    x12-parse invoice.edi --strict-body         # Keep every segment between ST and SE
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from parser_config import BodySlicing, DetectorKind, ParserConfig
from x12_errors import X12ParseError
from x12_parser import X12Parser

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s"


def build_config(args: argparse.Namespace) -> ParserConfig:
    return ParserConfig(
        element_separator=args.element_separator,
        detector=DetectorKind(args.detector),
        body_slicing=BodySlicing.STRICT if args.strict_body else BodySlicing.LEGACY,
        encoding=args.encoding,
    )


def parse_x12_file(input_file: str, output_file: str, config: ParserConfig, indent: Optional[int] = 2) -> int:
    """Parse an X12 file and save the tree as JSON."""
    to_stdout = output_file == "-"
    report = sys.stderr if to_stdout else sys.stdout

    try:
        interchange = X12Parser(config).parse_file(input_file)
    except OSError as e:
        print(f"Error: cannot read {input_file}: {e}", file=sys.stderr)
        return 1
    except X12ParseError as e:
        logger.error(f"Could not parse {input_file}: {e}")
        print(f"Error: {input_file} cannot be parsed: {e}", file=sys.stderr)
        return 1

    print(f"Parsing Results for {input_file}:", file=report)
    print(f"  Interchange Control Number: {interchange.control_number}", file=report)
    print(f"  Segment Terminator: {interchange.segment_terminator!r}", file=report)
    print(f"  Functional Groups: {len(interchange.functional_groups)}", file=report)
    for group in interchange.functional_groups:
        print(f"    Group {group.control_number}: {len(group.transaction_sets)} transaction sets", file=report)

    json_output = interchange.to_json(indent=indent)
    if to_stdout:
        sys.stdout.write(json_output + "\n")
    else:
        try:
            with open(output_file, "w") as f:
                f.write(json_output)
        except OSError as e:
            print(f"Error: cannot write {output_file}: {e}", file=sys.stderr)
            return 1
        print(f"JSON output saved to: {output_file}", file=report)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command line argument parsing."""
    parser = argparse.ArgumentParser(
        description="Parse X12 EDI interchange files to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input_file", help="Input X12 file")
    parser.add_argument("output_file", nargs="?", help="Output JSON file (default: input_file.json, '-' for stdout)")
    parser.add_argument(
        "--detector",
        choices=[kind.value for kind in DetectorKind],
        default=DetectorKind.COMPONENT_SEPARATOR.value,
        help="Segment terminator detection strategy",
    )
    parser.add_argument("--strict-body", action="store_true",
                        help="Keep the segment right before SE in the transaction set body")
    parser.add_argument("--element-separator", default="*", help="Element separator character (default: '*')")
    parser.add_argument("--encoding", default="latin-1", help="Text encoding of the input (default: latin-1)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation, 0 for compact output (default: 2)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)

    if not args.output_file:
        args.output_file = str(Path(args.input_file).with_suffix(".json"))

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: invalid parser options: {e}", file=sys.stderr)
        return 1

    return parse_x12_file(args.input_file, args.output_file, config, indent=args.indent or None)


if __name__ == "__main__":
    sys.exit(main())
