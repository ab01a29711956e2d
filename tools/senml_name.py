"""
senml_name.py - SenML name validation

The concatenated name (base name + name) MUST consist only of the
characters A-Z, a-z, 0-9, "-", ":", ".", "/" and "_", and MUST start
with a letter or a digit (RFC 8428 Section 4.5.1).

Usage:
    from senml_name import validate_name

    validate_name('urn:dev:ow:10e2073a01080063')  # True
    validate_name('-sensor')                      # False
"""

import re

NAME_PATTERN = re.compile(r'[A-Za-z0-9][A-Za-z0-9\-:./_]*')


def validate_name(name: str) -> bool:
    """Return True if name is a valid SenML name."""
    if not isinstance(name, str):
        return False
    return NAME_PATTERN.fullmatch(name) is not None
