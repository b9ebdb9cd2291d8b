"""Message schemas.

A schema declares the fields of one sentence type. Schemas are plain,
immutable values; the decoder and parser derive everything else (row
patterns, expected field counts) from them.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from navdecode.nmea.errors import ConfigurationError
from navdecode.nmea.extractor import DEFAULT_TALKER_ID_PATTERN
from navdecode.nmea.fields import FieldSpec
from navdecode.nmea.tokens import Token
from navdecode.nmea.types import Sentence

__all__ = ["MessageSchema", "validate_catalog"]

_MESSAGE_ID_REGEX = re.compile(r"[A-Za-z]{3}")


@dataclass(frozen=True)
class MessageSchema:
    """Declaration of one sentence type.

    Attributes:
        message_id: Three-letter message id, e.g. ``"GGA"``.
        fields: Fields in sentence order.
        talker_id_pattern: Regular expression the talker id must fully match.
            Defaults to any two letters. Vendor sentences put their fixed
            prefix here, e.g. ``"PSAT,"`` for ``$PSAT,HPR,...``.
        name: Key of the decoded record; defaults to ``message_id``.

    Raises:
        ConfigurationError: For a malformed message id, an invalid talker
            pattern, no fields, or duplicate field names.

    Example:
        >>> schema = MessageSchema("HDT", (FieldSpec("heading", "%f32 T"),))
        >>> schema.name, schema.field_count
        ('HDT', 2)
    """

    message_id: str
    fields: tuple[FieldSpec, ...]
    talker_id_pattern: str = DEFAULT_TALKER_ID_PATTERN
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        if not self.name:
            object.__setattr__(self, "name", self.message_id)

        if not _MESSAGE_ID_REGEX.fullmatch(self.message_id):
            raise ConfigurationError(f"invalid message id {self.message_id!r}")
        try:
            re.compile(self.talker_id_pattern)
        except re.error as e:
            raise ConfigurationError(
                f"invalid talker id pattern {self.talker_id_pattern!r}"
            ) from e
        if not self.fields:
            raise ConfigurationError(f"schema {self.name!r} declares no fields")

        names = [spec.name for spec in self.fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(
                f"schema {self.name!r} repeats field names {duplicates}"
            )

    @property
    def token_format(self) -> tuple[Token, ...]:
        """All tokens of all fields, in sentence order."""
        return tuple(token for spec in self.fields for token in spec.tokens)

    @property
    def field_count(self) -> int:
        """Number of comma-separated fields one sentence carries.

        A fixed-width token shares its comma field with the token after it;
        a suffixed token occupies a second comma field for its unit literal.
        """
        count = 0
        continues_field = False
        for token in self.token_format:
            if not continues_field:
                count += 1
            if token.suffix is not None:
                count += 1
            continues_field = token.width is not None
        return count

    def accepts(self, sentence: Sentence) -> bool:
        """Whether an extracted sentence belongs to this schema."""
        return sentence.message_id == self.message_id and bool(
            re.fullmatch(self.talker_id_pattern, sentence.talker_id)
        )


def validate_catalog(schemas: Iterable[MessageSchema]) -> list[MessageSchema]:
    """Check that schemas can be parsed together.

    Returns:
        The schemas as a list, in the given order.

    Raises:
        ConfigurationError: If two schemas share a message id or a name.
    """
    schemas = list(schemas)
    for attribute in ("message_id", "name"):
        seen: set[str] = set()
        for schema in schemas:
            value = getattr(schema, attribute)
            if value in seen:
                raise ConfigurationError(f"duplicate schema {attribute} {value!r}")
            seen.add(value)
    return schemas
