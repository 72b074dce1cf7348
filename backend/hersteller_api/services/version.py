"""
Hersteller Service — Version Token Codec
==========================================

What:  Converts the optimistic-locking version counter to and from the token
       callers exchange with the service.
How:   The token is the decimal version in double quotes, e.g. "3". It is the
       literal value of the ETag / If-Match / If-None-Match headers and is
       produced the same way for GraphQL callers.

    encode_version(3)       → '"3"'
    decode_version('"3"')   → 3
    decode_version('""')    → 0
    decode_version('3')     → VersionInvalid(version='3')
    decode_version(None)    → VersionInvalid(version=None)
"""

import re
from typing import Optional, Union

from hersteller_api.services.errors import VersionInvalid

# ASCII digits only; matched with fullmatch() so a trailing newline is rejected
VERSION_PATTERN = re.compile(r'"[0-9]*"')


def encode_version(version: int) -> str:
    """Render a version counter as its wire token."""
    return f'"{version}"'


def decode_version(token: Optional[str]) -> Union[int, VersionInvalid]:
    """
    Parse a caller-supplied version token.

    Returns:
        The non-negative version number, or VersionInvalid when the token is
        absent or is not a double-quoted run of digits. An empty run ('""')
        reads as version 0.
    """
    if token is None or not VERSION_PATTERN.fullmatch(token):
        return VersionInvalid(version=token)
    digits = token[1:-1]
    return int(digits) if digits else 0
