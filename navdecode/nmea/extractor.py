"""Sentence extraction from raw text.

Sentences are located by scanning the whole input with one regular
expression, so sentences may be surrounded by arbitrary noise, share a line
with other sentences or be separated by any line ending. Anything that does
not match the grammar below is ignored; extraction never fails.

Sentence grammar:
    $GPGGA,123519,4807.038,N,...*47
     | |  |                    |
     | |  |                    +-- '*' and exactly 2 hexadecimal digits
     | |  +-- content: zero or more ",<field>" (no '$', '*' or line break)
     | +-- message id: 3 letters
     +-- talker id: 2 letters (or a vendor prefix such as "PSAT,")
"""

import functools
import re
from collections.abc import Iterable

from navdecode.nmea.types import Sentence

__all__ = ["DEFAULT_TALKER_ID_PATTERN", "extract_sentences"]

DEFAULT_TALKER_ID_PATTERN = "[A-Za-z]{2}"

_MESSAGE_ID_PATTERN = "[A-Za-z]{3}"
_CONTENT_PATTERN = r"(?:,[^,*$\r\n]*)*"
_CHECKSUM_PATTERN = "[0-9A-Fa-f]{2}"


@functools.lru_cache(maxsize=None)
def _sentence_regex(talker_id_pattern: str) -> re.Pattern[str]:
    """Compile the sentence grammar for one talker id pattern."""
    return re.compile(
        rf"\$(?P<talker_id>{talker_id_pattern})"
        rf"(?P<message_id>{_MESSAGE_ID_PATTERN})"
        rf"(?P<content>{_CONTENT_PATTERN})"
        rf"\*(?P<checksum>{_CHECKSUM_PATTERN})"
    )


def _decode(chunk: str | bytes | bytearray | memoryview) -> str:
    if isinstance(chunk, str):
        return chunk
    return bytes(chunk).decode("utf-8", errors="ignore")


def _chunks(
    text: str | bytes | bytearray | Iterable[str | bytes],
) -> list[str]:
    """Normalize the accepted input forms to a list of strings.

    Lines of a file opened in binary mode arrive as bytes and are decoded
    like a single buffer.
    """
    if isinstance(text, (str, bytes, bytearray, memoryview)):
        return [_decode(text)]
    return [_decode(chunk) for chunk in text]


def extract_sentences(
    text: str | bytes | bytearray | Iterable[str | bytes],
    talker_id_pattern: str = DEFAULT_TALKER_ID_PATTERN,
) -> list[Sentence]:
    """Find every sentence in ``text``, in order of appearance.

    Checksums are captured but not verified here; see
    ``navdecode.nmea.checksum``.

    Args:
        text: A string, a bytes-like buffer (decoded as UTF-8, undecodable
            bytes dropped) or an iterable of strings or bytes such as the
            lines of a file.
        talker_id_pattern: Regular expression for the talker id. The default
            accepts any two letters. Vendor sentences use a literal prefix
            such as ``"PSAT,"``.

    Returns:
        The matched sentences. ``source_offset`` is the index of the ``$``
        within the string it was found in. When ``text`` is an iterable of
        strings, each offset is relative to its own string, not to the
        concatenated input.

    Example:
        >>> [s.message_id for s in extract_sentences("junk$GPHDT,274.07,T*03")]
        ['HDT']
        >>> extract_sentences("junk$GPHDT,274.07,T*03")[0].source_offset
        4
    """
    regex = _sentence_regex(talker_id_pattern)
    return [
        Sentence(
            talker_id=match["talker_id"],
            message_id=match["message_id"],
            content=match["content"],
            checksum=match["checksum"],
            source_offset=match.start(),
        )
        for chunk in _chunks(text)
        for match in regex.finditer(chunk)
    ]
