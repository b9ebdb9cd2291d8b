"""Schema-driven tokenizer.

Turns the content strings of every sentence of one message type into typed
columns, one column per (non-skip) token of the schema.

Decoding is done for the whole batch of sentences at once:

    1. Each content string (",f1,f2,...") is closed with an extra trailing
       comma, so an empty last field still terminates its column instead of
       silently shortening the row.
    2. Every row is matched against one pattern compiled from the schema's
       token format. A row that does not fit is a structural mismatch and
       fails the batch.
    3. Tokens are converted column by column and packed into numpy arrays.
       A token that cannot be converted, or a unit literal that differs from
       the declared one, fails the batch as well.

Failing the whole batch keeps every column of a record the same length; the
parser reports the failure for that message type only.
"""

import functools
import re
from collections.abc import Sequence

import numpy as np

from navdecode.nmea.errors import StructuralMismatchError, ValueDecodeError
from navdecode.nmea.schema import MessageSchema
from navdecode.nmea.tokens import Token, TokenKind

__all__ = ["decode_columns"]


@functools.lru_cache(maxsize=None)
def _row_regex(token_format: tuple[Token, ...]) -> re.Pattern[str]:
    """Compile the pattern of one comma-terminated content row.

    Every column token and every suffix literal becomes one capture group, in
    token order. Skip tokens become non-capturing groups.

    Example:
        ("%2f64", "%f64", "%c") -> ,([^,]{0,2})([^,]*),([^,]*),
    """
    parts = []
    continues_field = False
    for token in token_format:
        if not continues_field:
            parts.append(",")
        if token.kind is TokenKind.SKIP:
            parts.append(f"(?:{token.skip_pattern})")
        elif token.width is not None:
            parts.append(f"([^,]{{0,{token.width}}})")
        else:
            parts.append("([^,]*)")
        if token.suffix is not None:
            parts.append(",([^,]*)")
        continues_field = token.width is not None
    parts.append(",")
    return re.compile("".join(parts))


def _convert(token: Token, text: str, row: int, index: int) -> object:
    """Convert one token, attaching its location to any failure."""
    try:
        return token.convert(text)
    except ValueError as e:
        raise ValueDecodeError(str(e), row=row, token=index, text=text) from e


def decode_columns(schema: MessageSchema, contents: Sequence[str]) -> list[np.ndarray]:
    """Decode the content strings of one message type into token columns.

    Args:
        schema: Schema whose ``token_format`` describes every row.
        contents: Content strings of the matching sentences, in input order,
            each starting with its leading comma (as extracted).

    Returns:
        One numpy array per non-skip token of ``schema.token_format``, each
        with ``len(contents)`` entries.

    Raises:
        StructuralMismatchError: If a row has the wrong number of comma fields
            or a skipped field does not match its pattern.
        ValueDecodeError: If a token cannot be converted to its type, or a
            unit literal does not equal the declared suffix.

    Example:
        >>> decode_columns(HDT, [",274.07,T", ",,T"])
        [array([274.07,    nan], dtype=float32)]
    """
    token_format = schema.token_format
    regex = _row_regex(token_format)
    values: dict[int, list[object]] = {
        index: [] for index, token in enumerate(token_format) if token.produces_column
    }

    rows = [content + "," for content in contents]
    for row_index, row in enumerate(rows):
        match = regex.fullmatch(row)
        if match is None:
            raise StructuralMismatchError(
                row_index, schema.field_count, row.count(",") - 1
            )

        groups = iter(match.groups())
        for index, token in enumerate(token_format):
            if not token.produces_column:
                continue
            text = next(groups)
            values[index].append(_convert(token, text, row_index, index))
            if token.suffix is not None:
                literal = next(groups)
                if literal != token.suffix:
                    raise ValueDecodeError(
                        f"expected unit {token.suffix!r}",
                        row=row_index,
                        token=index,
                        text=literal,
                    )

    return [token_format[index].column(column) for index, column in values.items()]
