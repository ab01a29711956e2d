#!/usr/bin/env python3
"""
senml_base64.py - URL-safe, unpadded base64 for SenML data values

SenML data values ("vd") use the base64 URL-safe alphabet without padding
(RFC 4648 Section 5). Decoding is strict: the standard alphabet ("+", "/"),
padding characters and non-canonical trailing bits are rejected rather than
silently accepted.

Usage:
  # Encode a file (or an inline string) to a vd value
  python senml_base64.py encode payload.bin
  python senml_base64.py encode "light work"

  # Decode a vd value
  python senml_base64.py decode bGlnaHQgd29yaw
  python senml_base64.py decode bGlnaHQgd29yaw -o payload.bin

  # Info about a vd value
  python senml_base64.py info bGlnaHQgd29yaw
"""

import argparse
import base64
import re
import sys
from pathlib import Path

URLSAFE_PATTERN = re.compile(r'[A-Za-z0-9_-]*')


def encode(data: bytes) -> str:
    """Encode bytes to URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(data).decode('ascii').rstrip('=')


def decode(text: str) -> bytes:
    """
    Decode URL-safe base64 without padding.

    Raises:
        ValueError: text uses characters outside the URL-safe alphabet,
            has an impossible length, or has non-zero trailing bits.
    """
    if not isinstance(text, str):
        raise ValueError(f"Expected str, got {type(text).__name__}")

    if URLSAFE_PATTERN.fullmatch(text) is None:
        bad = next(c for c in text if not (c.isascii() and (c.isalnum() or c in '-_')))
        raise ValueError(f"Invalid character {bad!r} at offset {text.index(bad)}")

    if len(text) % 4 == 1:
        raise ValueError(f"Invalid length {len(text)}")

    padded = text + '=' * (-len(text) % 4)
    data = base64.urlsafe_b64decode(padded)

    # Leftover bits in the last symbol must be zero
    if encode(data) != text:
        raise ValueError("Invalid trailing bits")

    return data


def read_input(input_data: str) -> bytes:
    """Read a file if input_data names one, else use the text itself."""
    path = Path(input_data)
    if path.is_file():
        return path.read_bytes()
    return input_data.encode('utf-8')


def get_info(text: str) -> dict:
    """Get information about an encoded value."""
    stats = {
        'base64_size': len(text),
        'valid': False,
    }
    try:
        data = decode(text)
    except ValueError as e:
        stats['error'] = str(e)
        return stats

    stats['valid'] = True
    stats['decoded_size'] = len(data)
    stats['hex'] = data[:32].hex()
    try:
        stats['text'] = data.decode('utf-8')
    except UnicodeDecodeError:
        pass
    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Encode/decode SenML data values (URL-safe base64, no padding)'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    enc = subparsers.add_parser('encode', help='Encode bytes to a vd value')
    enc.add_argument('input', help='Input file or inline string')
    enc.add_argument('-o', '--output', type=Path, help='Output file (default: stdout)')

    dec = subparsers.add_parser('decode', help='Decode a vd value')
    dec.add_argument('input', help='Input file or base64 string')
    dec.add_argument('-o', '--output', type=Path, help='Output file (default: stdout)')
    dec.add_argument('-x', '--hex', action='store_true', help='Print decoded bytes as hex')

    inf = subparsers.add_parser('info', help='Show info about a vd value')
    inf.add_argument('input', help='Input file or base64 string')

    args = parser.parse_args(argv)

    if args.command == 'encode':
        encoded = encode(read_input(args.input))
        if args.output:
            args.output.write_text(encoded)
            print(f"Encoded to {args.output}", file=sys.stderr)
        else:
            print(encoded)

    elif args.command == 'decode':
        text = read_input(args.input).decode('utf-8', errors='replace').strip()
        try:
            data = decode(text)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if args.output:
            args.output.write_bytes(data)
            print(f"Decoded {len(data)} bytes to {args.output}", file=sys.stderr)
        elif args.hex:
            print(data.hex())
        else:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()

    elif args.command == 'info':
        text = read_input(args.input).decode('utf-8', errors='replace').strip()
        stats = get_info(text)
        print(f"Valid: {stats['valid']}")
        print(f"Base64 size: {stats['base64_size']} chars")
        if stats['valid']:
            print(f"Decoded size: {stats['decoded_size']} bytes")
            print(f"Hex: {stats['hex']}")
            if 'text' in stats:
                print(f"Text: {stats['text']!r}")
        else:
            print(f"Error: {stats['error']}")
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
