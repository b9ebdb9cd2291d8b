"""Tests for JSON formatting of decoded records."""

import json

import numpy as np

from navdecode.nmea import GPSMode, Record, parse_all
from server.formatters import format_parse_result, format_record
from tests.helpers import GGA_SENTENCE, make_sentence


def _record(**fields: np.ndarray) -> Record:
    rows = len(next(iter(fields.values())))
    return Record(
        name="TST",
        fields=fields,
        talker_id=np.array(["GP"] * rows),
        source_offset=np.arange(rows, dtype=np.int64),
    )


def test_nan_becomes_null() -> None:
    record = _record(value=np.array([1.5, np.nan], dtype=np.float32))
    assert format_record(record)["value"] == [1.5, None]


def test_nan_in_matrix_becomes_null() -> None:
    record = _record(utc=np.array([[12.0, 35.0, np.nan]]))
    assert format_record(record)["utc"] == [[12.0, 35.0, None]]


def test_modes_become_names() -> None:
    modes = np.empty((1, 2), dtype=object)
    modes[0] = [GPSMode.DIFFERENTIAL, GPSMode.UNKNOWN]
    record = _record(mode=modes)
    assert format_record(record)["mode"] == [["DIFFERENTIAL", "UNKNOWN"]]


def test_tuple_fields_become_lists() -> None:
    record = _record(
        value=np.array([1.0]),
        pair=(np.array([1], dtype=np.uint8), np.array(["A"])),
    )
    assert format_record(record)["pair"] == [[1], ["A"]]


def test_provenance_columns_last() -> None:
    record = _record(value=np.array([1.0]))
    assert list(format_record(record)) == ["value", "talker_id", "source_offset"]


def test_parse_result_is_valid_json() -> None:
    data = json.loads(format_parse_result(parse_all(GGA_SENTENCE)))
    assert data["messages"]["GGA"]["ref_station_id"] == [65535]
    assert data["messages"]["GGA"]["age_dgps"] == [None]


def test_float32_keeps_shortest_form() -> None:
    record = _record(hdop=np.array([0.9, 545.4, np.nan], dtype=np.float32))
    assert format_record(record)["hdop"] == [0.9, 545.4, None]


def test_float32_matrix_keeps_shortest_form() -> None:
    record = _record(utc=np.array([[12.0, 35.0, 19.1]], dtype=np.float32))
    assert format_record(record)["utc"] == [[12.0, 35.0, 19.1]]


def test_absent_modes_become_unknown() -> None:
    text = "\n".join([
        make_sentence("GPGGA,123519,4807.038,N,01131.000,E,,08,0.9,545.4,M,46.9,M,,"),
        make_sentence("GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,"),
    ])
    data = json.loads(format_parse_result(parse_all(text)))
    assert data["messages"]["GGA"]["quality"] == ["UNKNOWN"]
    assert data["messages"]["VTG"]["mode_indicator"] == ["UNKNOWN"]
