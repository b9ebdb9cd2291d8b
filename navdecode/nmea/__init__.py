"""Schema-driven NMEA 0183 sentence decoding."""

from navdecode.nmea.catalog import ALL_SCHEMAS
from navdecode.nmea.checksum import (
    calculate_checksum,
    validate_checksum,
    validate_checksums,
)
from navdecode.nmea.decoder import decode_columns
from navdecode.nmea.errors import (
    ConfigurationError,
    DecodeError,
    NMEAError,
    StructuralMismatchError,
    ValueDecodeError,
)
from navdecode.nmea.extractor import extract_sentences
from navdecode.nmea.fields import FieldSpec
from navdecode.nmea.parser import parse, parse_all
from navdecode.nmea.schema import MessageSchema, validate_catalog
from navdecode.nmea.tokens import Token, TokenKind, parse_token, skip
from navdecode.nmea.types import GPSMode, ParseResult, Record, Sentence

__all__ = [
    "ALL_SCHEMAS",
    "ConfigurationError",
    "DecodeError",
    "FieldSpec",
    "GPSMode",
    "MessageSchema",
    "NMEAError",
    "ParseResult",
    "Record",
    "Sentence",
    "StructuralMismatchError",
    "Token",
    "TokenKind",
    "ValueDecodeError",
    "calculate_checksum",
    "decode_columns",
    "extract_sentences",
    "parse",
    "parse_all",
    "parse_token",
    "skip",
    "validate_catalog",
    "validate_checksum",
    "validate_checksums",
]
