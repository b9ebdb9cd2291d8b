"""Exceptions raised while declaring schemas and decoding sentences.

Checksum failures and text that never matches the sentence grammar are not
errors: those sentences are simply dropped. What remains is split into
problems with the schemas themselves (``ConfigurationError``, raised before
any text is read) and problems decoding one message type
(``DecodeError`` and its subclasses, scoped to that type).
"""


class NMEAError(Exception):
    """Base class for all errors raised by ``navdecode.nmea``."""


class ConfigurationError(NMEAError, ValueError):
    """A schema, field or token declaration is inconsistent."""


class DecodeError(NMEAError, ValueError):
    """A batch of sentences sharing one message type could not be decoded.

    Attributes:
        message_name: Name of the message type whose batch failed. Filled in
            by the parser when the error is raised below the schema level.
    """

    def __init__(self, detail: str, message_name: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.message_name = message_name

    def __str__(self) -> str:
        if self.message_name is None:
            return self.detail
        return f"{self.message_name}: {self.detail}"


class StructuralMismatchError(DecodeError):
    """A sentence does not split into the comma fields its schema expects."""

    def __init__(
        self,
        row: int,
        expected: int,
        found: int,
        message_name: str | None = None,
    ) -> None:
        super().__init__(
            f"row {row}: expected {expected} fields, found {found}",
            message_name,
        )
        self.row = row
        self.expected = expected
        self.found = found


class ValueDecodeError(DecodeError):
    """A single token could not be converted to its declared type."""

    def __init__(
        self,
        reason: str,
        row: int | None = None,
        token: int | None = None,
        text: str | None = None,
        message_name: str | None = None,
    ) -> None:
        location = []
        if row is not None:
            location.append(f"row {row}")
        if token is not None:
            location.append(f"token {token}")
        prefix = ", ".join(location)
        detail = f"{prefix}: {reason}" if prefix else reason
        if text is not None:
            detail = f"{detail} ({text!r})"
        super().__init__(detail, message_name)
        self.row = row
        self.token = token
        self.text = text
