"""Field declarations.

A field is one named, semantically meaningful value of a sentence. It reads
one or more tokens and combines them with its post-processing function:
latitude reads degrees, minutes and hemisphere and returns signed decimal
degrees; altitude reads one float followed by its "M" unit marker.
"""

import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from navdecode.nmea.errors import ConfigurationError
from navdecode.nmea.postprocess import default
from navdecode.nmea.tokens import Token, as_token

__all__ = ["FieldSpec"]

# Record attributes that cannot be used as field names
_RESERVED_NAMES = ("talker_id", "source_offset")


def _accepts_arguments(function: Callable[..., Any], count: int) -> bool:
    """Check that ``function`` can be called with ``count`` positional values."""
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); trust the declaration
        return True
    try:
        signature.bind(*range(count))
    except TypeError:
        return False
    return True


@dataclass(frozen=True)
class FieldSpec:
    """One named field of a message schema.

    Attributes:
        name: Attribute name in the decoded record.
        tokens: Tokens read by this field, as ``Token`` objects or format
            strings (see ``navdecode.nmea.tokens``). A single format string
            is accepted as shorthand for a one-token field.
        post_process: Called with one decoded column per non-skip token and
            returns the field value. Defaults to unwrapping a single column
            or returning several columns as a tuple.

    Raises:
        ConfigurationError: If the name is not an identifier or is reserved,
            no tokens are given, or ``post_process`` cannot take one argument
            per decoded token.

    Example:
        >>> FieldSpec("alt", "%f32 M").tokens
        (Token(kind=<TokenKind.FLOAT: 'f'>, bits=32, width=None, suffix='M', pattern=None),)
    """

    name: str
    tokens: tuple[Token, ...] = ("%s",)
    post_process: Callable[..., Any] = default

    def __post_init__(self) -> None:
        tokens: Iterable[Token | str] = self.tokens
        if isinstance(tokens, (str, Token)):
            tokens = (tokens,)
        object.__setattr__(self, "tokens", tuple(as_token(token) for token in tokens))

        if not self.name.isidentifier() or self.name in _RESERVED_NAMES:
            raise ConfigurationError(f"invalid field name {self.name!r}")
        if not self.tokens:
            raise ConfigurationError(f"field {self.name!r} declares no tokens")
        if self.produces_value and not _accepts_arguments(
            self.post_process, self.column_count
        ):
            raise ConfigurationError(
                f"post-processing of field {self.name!r} cannot take "
                f"{self.column_count} token columns"
            )

    @property
    def column_count(self) -> int:
        """Number of decoded columns handed to ``post_process``."""
        return sum(token.produces_column for token in self.tokens)

    @property
    def produces_value(self) -> bool:
        """False for fields made only of skip tokens; those are not output."""
        return self.column_count > 0
