#!/usr/bin/env python3
"""
senml_cli.py - Resolve SenML packs from the command line

Usage:
    # Resolve a pack (file or stdin) and print the resolved pack
    python tools/senml_cli.py resolve pack.json
    cat pack.json | python tools/senml_cli.py resolve
    python tools/senml_cli.py resolve pack.json --now 1320078429 --indent 2
    python tools/senml_cli.py resolve pack.json -o resolved.json
    python tools/senml_cli.py resolve pack.json --config senml.yaml -v

    # Check names against the SenML name grammar
    python tools/senml_cli.py validate-name urn:dev:ow:10e2073a01080063 "bad name"

Exit status is 0 on success and 1 if the pack is rejected or a name is
invalid.
"""

import argparse
import logging
import sys
from pathlib import Path

from senml_config import ConfigError, load_config
from senml_errors import InvalidJSONError, SenMLError
from senml_json import parse_json, to_json
from senml_name import validate_name

logger = logging.getLogger('senml')


def cmd_resolve(args) -> int:
    try:
        config = load_config(args.config).merged(
            max_records=args.max_records,
            indent=args.indent,
            now=args.now,
            verbose=args.verbose or None,
        )
        now = config.reference_time()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.input and args.input != '-':
        path = Path(args.input)
        if not path.exists():
            print(f"Error: {path} not found", file=sys.stderr)
            return 1
        source = str(path)
    else:
        path = None
        source = '<stdin>'

    try:
        try:
            if path is not None:
                text = path.read_text(encoding='utf-8')
            else:
                text = sys.stdin.buffer.read().decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidJSONError(detail=str(e)) from e
        records = parse_json(text, now, config.max_records)
    except SenMLError as e:
        print(f"Error: {source}: {e}", file=sys.stderr)
        return 1

    output = to_json(records, indent=config.indent)
    logger.info("Resolved %d records from %s", len(records), source)

    if args.output:
        args.output.write_text(output + '\n', encoding='utf-8')
        print(f"Resolved pack written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


def cmd_validate_name(args) -> int:
    status = 0
    for name in args.names:
        if validate_name(name):
            print(f"valid    {name}")
        else:
            print(f"invalid  {name}")
            status = 1
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='senml',
        description='Resolve SenML (RFC 8428) JSON packs'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    res = subparsers.add_parser('resolve', help='Resolve a SenML pack')
    res.add_argument('input', nargs='?', help='Input pack (default: stdin)')
    res.add_argument('-o', '--output', type=Path, help='Output file (default: stdout)')
    res.add_argument('--now', type=float, help='Reference time for relative times (Unix seconds)')
    res.add_argument('--indent', type=int, help='Indent output JSON')
    res.add_argument('--max-records', type=int, help='Reject packs with more records')
    res.add_argument('-c', '--config', type=Path, help='YAML config file')
    res.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    res.set_defaults(func=cmd_resolve)

    val = subparsers.add_parser('validate-name', help='Validate SenML names')
    val.add_argument('names', nargs='+', help='Names to check')
    val.set_defaults(func=cmd_validate_name)

    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
