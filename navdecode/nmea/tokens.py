"""Token-format descriptors.

A token is the unit of decoding: usually one comma-separated NMEA field, but
a fixed-width token splits a field further. Fields are declared with a small
format language modelled on scanf-style conversions:

    %[width]TYPE[ LITERAL]

    TYPE     f32, f64              float (empty -> NaN)
             d8, d16, d32, d64     signed integer (empty -> dtype minimum)
             u8, u16, u32, u64     unsigned integer (empty -> dtype maximum)
             c                     single character (empty -> "")
             s                     string, verbatim (empty -> "")
    width    read exactly this many leading digits; the next token reads the
             rest of the same comma field
    LITERAL  unit marker carried in the following comma field, which must
             equal the literal exactly (e.g. "%f32 M" for "545.4,M")

Examples:
    "%2f32" "%2f32" "%f32"   UTC "123519.00" -> 12, 35, 19.0
    "%2f64" "%f64" "%c"      latitude "4807.038,N" -> 48, 7.038, "N"
    "%f32 T"                 heading "274.07,T" -> 274.07
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from navdecode.nmea.errors import ConfigurationError

__all__ = ["Token", "TokenKind", "as_token", "parse_token", "skip"]

_FORMAT_REGEX = re.compile(
    r"%(?P<width>[1-9]\d*)?(?P<kind>[fdu])?(?P<bits>8|16|32|64)?(?P<text>[cs])?"
    r"(?: (?P<suffix>[^\s,*$]+))?"
)
_FLOAT_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_TEXT = re.compile(r"[+-]?\d+")
_DEFAULT_SKIP_PATTERN = "[^,]*"

_VALID_BITS = {"f": (32, 64), "d": (8, 16, 32, 64), "u": (8, 16, 32, 64)}


def _check_skip_pattern(pattern: str) -> None:
    """Reject skip patterns that do not compile or that capture groups.

    Capture groups would shift the decoder's groups onto the next token.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"invalid skip pattern {pattern!r}") from e
    if compiled.groups:
        raise ConfigurationError(
            f"skip pattern {pattern!r} must not contain capture groups; "
            "use (?:...) instead"
        )


class TokenKind(Enum):
    """Primitive type of a decoded token."""

    FLOAT = "f"
    SIGNED = "d"
    UNSIGNED = "u"
    CHAR = "c"
    STRING = "s"
    SKIP = "skip"


@dataclass(frozen=True)
class Token:
    """Declarative description of how one token is decoded.

    Attributes:
        kind: Primitive type of the decoded value.
        bits: Width of numeric types (8/16/32/64 for integers, 32/64 for
            floats); None otherwise.
        width: Exact number of leading digits this token reads from its comma
            field, leaving the remainder to the next token.
        suffix: Unit literal expected in the comma field after this token.
        pattern: Regular expression a skipped field must match.
    """

    kind: TokenKind
    bits: int | None = None
    width: int | None = None
    suffix: str | None = None
    pattern: str | None = None

    def __post_init__(self) -> None:
        numeric = self.kind in (TokenKind.FLOAT, TokenKind.SIGNED, TokenKind.UNSIGNED)
        if numeric and self.bits not in _VALID_BITS[self.kind.value]:
            raise ConfigurationError(
                f"invalid bit width {self.bits} for {self.kind.name}"
            )
        if not numeric and self.bits is not None:
            raise ConfigurationError(f"{self.kind.name} tokens take no bit width")
        if self.width is not None and (not numeric or self.width < 1):
            raise ConfigurationError("only numeric tokens take a positive width")
        if self.kind is TokenKind.SKIP:
            if self.width is not None or self.suffix is not None:
                raise ConfigurationError("skip tokens take no width or suffix")
            _check_skip_pattern(self.skip_pattern)
        elif self.pattern is not None:
            raise ConfigurationError("only skip tokens take a pattern")
        if self.width is not None and self.suffix is not None:
            raise ConfigurationError("a fixed-width token cannot carry a suffix")
        if self.suffix is not None and (
            not self.suffix or re.search(r"[\s,*$]", self.suffix)
        ):
            raise ConfigurationError(f"invalid suffix literal {self.suffix!r}")

    def __str__(self) -> str:
        if self.kind is TokenKind.SKIP:
            return f"skip({self.pattern or _DEFAULT_SKIP_PATTERN})"
        width = "" if self.width is None else str(self.width)
        bits = "" if self.bits is None else str(self.bits)
        suffix = "" if self.suffix is None else f" {self.suffix}"
        return f"%{width}{self.kind.value}{bits}{suffix}"

    @property
    def produces_column(self) -> bool:
        """Whether the token contributes a decoded column."""
        return self.kind is not TokenKind.SKIP

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype of the decoded column."""
        if self.kind is TokenKind.FLOAT:
            return np.dtype(f"float{self.bits}")
        if self.kind is TokenKind.SIGNED:
            return np.dtype(f"int{self.bits}")
        if self.kind is TokenKind.UNSIGNED:
            return np.dtype(f"uint{self.bits}")
        if self.kind is TokenKind.CHAR:
            return np.dtype("<U1")
        return np.dtype(np.str_)

    @property
    def absent(self) -> Any:
        """Value an empty token decodes to."""
        if self.kind is TokenKind.FLOAT:
            return np.nan
        if self.kind is TokenKind.SIGNED:
            return int(np.iinfo(self.dtype).min)
        if self.kind is TokenKind.UNSIGNED:
            return int(np.iinfo(self.dtype).max)
        return ""

    def convert(self, text: str) -> Any:
        """Convert the raw text of one token.

        Raises:
            ValueError: If the text is not a valid value of this token's type.
                The message states the reason; the decoder adds the location.
        """
        if not text:
            return self.absent
        if self.width is not None and (len(text) != self.width or not text.isdigit()):
            raise ValueError(f"expected exactly {self.width} digits")
        if self.kind is TokenKind.FLOAT:
            if not _FLOAT_TEXT.fullmatch(text):
                raise ValueError("not a number")
            return float(text)
        if self.kind in (TokenKind.SIGNED, TokenKind.UNSIGNED):
            if not _INTEGER_TEXT.fullmatch(text):
                raise ValueError("not an integer")
            value = int(text)
            limits = np.iinfo(self.dtype)
            if not limits.min <= value <= limits.max:
                raise ValueError(f"out of range for {self.dtype}")
            return value
        if self.kind is TokenKind.CHAR and len(text) != 1:
            raise ValueError("expected a single character")
        return text

    def column(self, values: list[Any]) -> np.ndarray:
        """Pack converted values into a column of this token's dtype."""
        return np.array(values, dtype=self.dtype)

    @property
    def skip_pattern(self) -> str:
        return self.pattern or _DEFAULT_SKIP_PATTERN


def parse_token(spec: str) -> Token:
    """Build a token from its format string.

    Args:
        spec: Format string such as ``"%f32"``, ``"%2f64"`` or ``"%f32 M"``.

    Returns:
        The equivalent ``Token``.

    Raises:
        ConfigurationError: If ``spec`` is not a valid format string.

    Example:
        >>> parse_token("%f32 M")
        Token(kind=<TokenKind.FLOAT: 'f'>, bits=32, width=None, suffix='M', pattern=None)
    """
    match = _FORMAT_REGEX.fullmatch(spec.strip())
    if match is None:
        raise ConfigurationError(f"invalid token format {spec!r}")
    kind_code, bits, text_code = match["kind"], match["bits"], match["text"]
    if kind_code is not None and (bits is None or text_code is not None):
        raise ConfigurationError(f"invalid token format {spec!r}")
    if kind_code is None and (bits is not None or text_code is None):
        raise ConfigurationError(f"invalid token format {spec!r}")
    return Token(
        kind=TokenKind(kind_code or text_code),
        bits=int(bits) if bits is not None else None,
        width=int(match["width"]) if match["width"] is not None else None,
        suffix=match["suffix"],
    )


def skip(pattern: str = _DEFAULT_SKIP_PATTERN) -> Token:
    """A token that consumes one comma field matching ``pattern``."""
    return Token(kind=TokenKind.SKIP, pattern=pattern)


def as_token(token: Token | str) -> Token:
    """Accept either a ``Token`` or its format string."""
    if isinstance(token, Token):
        return token
    return parse_token(token)
