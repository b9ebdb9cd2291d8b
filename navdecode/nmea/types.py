"""NMEA data types for extracted sentences and decoded records.

Design Decisions:
    1. Columnar records: every message type decodes into one ``Record`` whose
       fields are numpy arrays with one row per sentence. Logs usually hold
       thousands of sentences of a handful of types, so per-type columns are
       what consumers slice and plot.

    2. Absence sentinels instead of None: empty NMEA fields decode to NaN for
       floats, the dtype maximum for unsigned integers (255 for ``u8``, which
       is also ``GPSMode.UNKNOWN``), the dtype minimum for signed integers and
       ``""`` for characters and strings. This keeps columns homogeneous.

    3. Provenance: each record carries the talker id and the source offset of
       every row so a decoded value can be traced back to the input text.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import numpy as np

from navdecode.nmea.errors import DecodeError


class GPSMode(IntEnum):
    """Kind of positioning fix reported by a receiver.

    Values are the ASCII codes of the NMEA mode indicator letters, so a mode
    character maps to its member with ``GPSMode(ord(character))``. GGA fix
    quality digits are mapped onto the same members by
    ``navdecode.nmea.postprocess.fix_quality``.
    """

    NO_FIX = ord("N")
    AUTONOMOUS = ord("A")
    DIFFERENTIAL = ord("D")
    PRECISE = ord("P")
    REAL_TIME_KINEMATIC = ord("R")
    FLOAT_RTK = ord("F")
    ESTIMATED = ord("E")
    MANUAL = ord("M")
    SIMULATED = ord("S")
    UNKNOWN = 255


@dataclass(frozen=True)
class Sentence:
    """One checksum-delimited sentence found in the input.

    Attributes:
        talker_id: Talker id as captured, e.g. ``"GP"`` or ``"PSAT,"`` for
            vendor sentences.
        message_id: Three-letter message id, e.g. ``"GGA"``.
        content: Field text including the leading comma, without ``$`` and
            checksum, e.g. ``",123519,4807.038,N"``.
        checksum: The two hex digits found after ``*``.
        source_offset: Index of the ``$`` in the string (or chunk) the
            sentence was found in.
    """

    talker_id: str
    message_id: str
    content: str
    checksum: str
    source_offset: int

    @property
    def text(self) -> str:
        """The sentence as it appeared, from ``$`` to the checksum digits."""
        return f"${self.talker_id}{self.message_id}{self.content}*{self.checksum}"


@dataclass(eq=False)
class Record:
    """Decoded sentences of one message type, stored column by column.

    Attributes:
        name: Message type name, e.g. ``"GGA"``.
        fields: Field name to value. A value is a numpy array with one entry
            (or one row) per sentence, or a tuple of such arrays for fields
            left as separate tokens.
        talker_id: Talker id of every row.
        source_offset: Position of every row's ``$`` in the input.

    Example:
        >>> text = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"
        >>> result = parse_all(text)
        >>> gga = result["GGA"]
        >>> len(gga)
        1
        >>> gga["latitude"]
        array([48.1173])
        >>> gga.talker_id
        array(['GP'], dtype='<U2')
    """

    name: str
    fields: dict[str, Any]
    talker_id: np.ndarray
    source_offset: np.ndarray

    def __len__(self) -> int:
        return len(self.source_offset)

    def __getitem__(self, key: str) -> Any:
        if key == "talker_id":
            return self.talker_id
        if key == "source_offset":
            return self.source_offset
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in ("talker_id", "source_offset") or key in self.fields

    @property
    def columns(self) -> list[str]:
        """Field names in schema order, followed by the provenance columns."""
        return [*self.fields, "talker_id", "source_offset"]


@dataclass(eq=False)
class ParseResult(Mapping[str, Record]):
    """Records keyed by message type name, plus per-type decode failures.

    A message type with no matching sentence has no key. A message type whose
    batch failed to decode has no key either; its exception is kept in
    ``errors`` instead so the other types of the same call are unaffected.
    """

    records: dict[str, Record] = field(default_factory=dict)
    errors: dict[str, DecodeError] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Record:
        return self.records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
