"""Sentence checksums.

Every extracted sentence carries a checksum: the XOR of the character codes
between ``$`` and ``*``, written after the ``*`` as exactly two hex digits.
The parser drops sentences whose checksum does not verify before any field
is decoded, so a corrupted sentence never reaches a record.

    $GPHDT,274.07,T*03
     \____________/ ^^
      XOR -> 0x03   written checksum (either case)
"""

import re
from collections.abc import Iterable

__all__ = ["calculate_checksum", "validate_checksum", "validate_checksums"]

_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]{2}")


def _split_sentence(sentence: str) -> tuple[str, str] | None:
    """Split ``$body*hh`` into body and written checksum.

    Returns:
        ``(body, hh)``, or None when the ``$`` start, the ``*`` separator or
        the two hex digits are missing.
    """
    if not sentence.startswith("$"):
        return None
    body, separator, written = sentence[1:].partition("*")
    if not separator or not _HEX_DIGITS.fullmatch(written):
        return None
    return body, written


def calculate_checksum(content: str) -> int:
    """XOR of the character codes of ``content``.

    Args:
        content: Sentence body, without the ``$`` and the ``*hh`` tail.

    Example:
        >>> calculate_checksum("GPHDT,274.07,T")
        3
    """
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def validate_checksum(sentence: str) -> bool:
    """Whether the written checksum of ``sentence`` matches its body.

    Surrounding whitespace, such as a trailing ``\\r\\n``, is ignored.
    Anything that is not a complete ``$body*hh`` sentence is invalid.

    Example:
        >>> validate_checksum("$GPHDT,274.07,T*03")
        True
        >>> validate_checksum("$GPHDT,274.07,T*+3")
        False
    """
    parts = _split_sentence(sentence.strip())
    if parts is None:
        return False
    body, written = parts
    return calculate_checksum(body) == int(written, 16)


def validate_checksums(sentences: Iterable[str]) -> list[bool]:
    """Validate a batch of sentences, one independent result per sentence."""
    return [validate_checksum(sentence) for sentence in sentences]
