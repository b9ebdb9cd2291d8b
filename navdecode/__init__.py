"""navdecode: decode NMEA 0183 text into typed, per-message-type records."""

from navdecode.nmea import (
    ALL_SCHEMAS,
    ConfigurationError,
    DecodeError,
    FieldSpec,
    GPSMode,
    MessageSchema,
    ParseResult,
    Record,
    StructuralMismatchError,
    ValueDecodeError,
    extract_sentences,
    parse,
    parse_all,
    validate_checksum,
)

__all__ = [
    "ALL_SCHEMAS",
    "ConfigurationError",
    "DecodeError",
    "FieldSpec",
    "GPSMode",
    "MessageSchema",
    "ParseResult",
    "Record",
    "StructuralMismatchError",
    "ValueDecodeError",
    "extract_sentences",
    "parse",
    "parse_all",
    "validate_checksum",
]
