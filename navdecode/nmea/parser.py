"""Parse raw text into per-message-type records.

Pipeline:
    raw text
      -> extract sentences (one scan per distinct talker id pattern)
      -> drop sentences with a bad checksum
      -> per schema: select matching sentences, decode token columns,
         post-process fields, attach talker id and source offset
      -> ParseResult keyed by schema name

A schema whose batch fails to decode is reported in ``ParseResult.errors``
and logged; the other schemas of the same call are unaffected. ``parse``
keeps no state between calls, so independent calls may run in parallel.
"""

import logging
from collections.abc import Iterable
from typing import Any

import numpy as np

from navdecode.nmea.catalog import ALL_SCHEMAS
from navdecode.nmea.checksum import validate_checksum
from navdecode.nmea.decoder import decode_columns
from navdecode.nmea.errors import DecodeError, ValueDecodeError
from navdecode.nmea.extractor import extract_sentences
from navdecode.nmea.schema import MessageSchema, validate_catalog
from navdecode.nmea.types import ParseResult, Record, Sentence

__all__ = ["parse", "parse_all"]

logger = logging.getLogger(__name__)

Text = str | bytes | bytearray | Iterable[str | bytes]


def _valid_sentences(text: Text, talker_id_pattern: str) -> list[Sentence]:
    """Extract sentences and keep those whose checksum verifies."""
    sentences = extract_sentences(text, talker_id_pattern)
    valid = [sentence for sentence in sentences if validate_checksum(sentence.text)]
    if len(valid) < len(sentences):
        logger.debug(
            "Dropped %d of %d sentences with a bad checksum",
            len(sentences) - len(valid),
            len(sentences),
        )
    return valid


def _assemble_fields(
    schema: MessageSchema,
    columns: list[np.ndarray],
) -> dict[str, Any]:
    """Hand each field its token columns and collect the post-processed values."""
    values: dict[str, Any] = {}
    position = 0
    for spec in schema.fields:
        if not spec.produces_value:
            continue
        tokens = columns[position : position + spec.column_count]
        position += spec.column_count
        try:
            values[spec.name] = spec.post_process(*tokens)
        except DecodeError:
            raise
        except ValueError as e:
            raise ValueDecodeError(f"field {spec.name!r}: {e}") from e
    return values


def _build_record(schema: MessageSchema, sentences: list[Sentence]) -> Record:
    """Decode the sentences of one schema into a record."""
    columns = decode_columns(schema, [sentence.content for sentence in sentences])
    return Record(
        name=schema.name,
        fields=_assemble_fields(schema, columns),
        talker_id=np.array(
            [sentence.talker_id for sentence in sentences], dtype=np.str_
        ),
        source_offset=np.array(
            [sentence.source_offset for sentence in sentences], dtype=np.int64
        ),
    )


def parse(schemas: Iterable[MessageSchema], text: Text) -> ParseResult:
    """Decode every sentence of the given types found in ``text``.

    Args:
        schemas: Message schemas to decode. Message ids and names must be
            unique.
        text: A string, a bytes-like buffer, or an iterable of strings or
            bytes (e.g. lines). With an iterable, source offsets are relative
            to each item.

    Returns:
        Records keyed by schema name, in schema order. Types without any
        valid sentence are absent. Types whose batch failed are absent from
        the mapping and present in ``errors``.

    Raises:
        ConfigurationError: If two schemas share a message id or name. Raised
            before the text is read.

    Example:
        >>> result = parse([GGA, VTG], open("track.nmea").read())
        >>> sorted(result)
        ['GGA', 'VTG']
        >>> result["GGA"]["numsat"]
        array([8, 9, 9], dtype=uint8)
    """
    schemas = validate_catalog(schemas)
    if not isinstance(text, (str, bytes, bytearray, memoryview)):
        # An iterator would be exhausted by the first scan
        text = list(text)

    sentences_by_pattern: dict[str, list[Sentence]] = {}
    result = ParseResult()
    for schema in schemas:
        pattern = schema.talker_id_pattern
        if pattern not in sentences_by_pattern:
            sentences_by_pattern[pattern] = _valid_sentences(text, pattern)

        matching = [s for s in sentences_by_pattern[pattern] if schema.accepts(s)]
        if not matching:
            continue

        try:
            result.records[schema.name] = _build_record(schema, matching)
        except DecodeError as e:
            e.message_name = schema.name
            logger.warning(
                "Could not decode %d %s sentences: %s",
                len(matching),
                schema.name,
                e.detail,
            )
            result.errors[schema.name] = e
        else:
            logger.debug("Decoded %d %s sentences", len(matching), schema.name)

    return result


def parse_all(text: Text) -> ParseResult:
    """Decode ``text`` with every built-in schema."""
    return parse(ALL_SCHEMAS, text)
