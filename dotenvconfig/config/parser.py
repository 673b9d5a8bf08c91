"""
.env Parser
===========

Turns the contents of a ``.env`` file into a flat ``dict``. Each non-blank,
non-comment line must have the form ``KEY=VALUE``; whitespace around the key
and value is ignored and only the first ``=`` separates them.
"""

from typing import Dict, Union

from .exceptions import ParseError

COMMENT_PREFIX = "#"
SEPARATOR = "="


def parse(data: Union[bytes, str]) -> Dict[str, str]:
    """
    Parse ``.env`` content into a mapping.

    Args:
        data: Raw file bytes (UTF-8) or already decoded text

    Returns:
        Mapping of key to value; later duplicates overwrite earlier ones

    Raises:
        ParseError: On the first malformed line. Nothing is returned in that case.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(repr(data[e.start:e.end]), reason="invalid utf-8 in config") from e
    else:
        text = data

    result: Dict[str, str] = {}

    for line in text.split("\n"):
        trimmed = line.strip()

        # Skip empty lines and comments
        if not trimmed or trimmed.startswith(COMMENT_PREFIX):
            continue

        key, sep, value = trimmed.partition(SEPARATOR)
        if not sep:
            raise ParseError(trimmed)

        result[key.strip()] = value.strip()

    return result


__all__ = ["parse"]
