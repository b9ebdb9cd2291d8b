"""Tests for field and message schema declarations."""

import pytest

from navdecode.nmea import (
    ConfigurationError,
    FieldSpec,
    MessageSchema,
    Token,
    TokenKind,
    extract_sentences,
    skip,
    validate_catalog,
)
from navdecode.nmea.catalog import GGA, HDT, PSATHPR, VTG
from navdecode.nmea.postprocess import decimal_degrees


class TestFieldSpec:
    """Tests for FieldSpec declarations."""

    def test_single_format_string(self):
        spec = FieldSpec("alt", "%f32 M")
        assert spec.tokens == (Token(TokenKind.FLOAT, bits=32, suffix="M"),)
        assert spec.column_count == 1

    def test_default_is_one_string_token(self):
        spec = FieldSpec("project_id")
        assert spec.tokens == (Token(TokenKind.STRING),)

    def test_mixed_tokens(self):
        spec = FieldSpec("kind", ("%f32", skip()))
        assert spec.column_count == 1
        assert spec.produces_value

    def test_skip_only_field_produces_no_value(self):
        spec = FieldSpec("ignored", (skip(),))
        assert spec.column_count == 0
        assert not spec.produces_value

    def test_post_process_arity_mismatch(self):
        with pytest.raises(ConfigurationError, match="cannot take 1 token columns"):
            FieldSpec("latitude", "%f64", decimal_degrees)

    def test_variadic_post_process(self):
        spec = FieldSpec("pair", ("%f32", "%f32"), lambda *columns: columns)
        assert spec.column_count == 2

    def test_no_tokens(self):
        with pytest.raises(ConfigurationError, match="no tokens"):
            FieldSpec("empty", ())

    @pytest.mark.parametrize("name", ["", "2d", "with space", "talker_id", "source_offset"])
    def test_invalid_names(self, name):
        with pytest.raises(ConfigurationError):
            FieldSpec(name, "%f32")

    def test_invalid_token_format(self):
        with pytest.raises(ConfigurationError):
            FieldSpec("value", "%q")

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            FieldSpec("value", "%f16")


class TestMessageSchema:
    """Tests for MessageSchema declarations."""

    def test_name_defaults_to_message_id(self):
        assert HDT.name == "HDT"
        assert PSATHPR.name == "PSATHPR"
        assert PSATHPR.message_id == "HPR"

    def test_fields_become_tuple(self):
        schema = MessageSchema("ABC", [FieldSpec("value", "%f32")])
        assert isinstance(schema.fields, tuple)

    @pytest.mark.parametrize(
        "schema, count",
        [(GGA, 14), (VTG, 9), (HDT, 2), (PSATHPR, 5)],
    )
    def test_field_count(self, schema, count):
        assert schema.field_count == count

    def test_token_format_flattens_fields(self):
        assert [str(token) for token in GGA.token_format[:6]] == [
            "%2f32",
            "%2f32",
            "%f32",
            "%2f64",
            "%f64",
            "%c",
        ]

    @pytest.mark.parametrize("message_id", ["", "GG", "GGAA", "G1A"])
    def test_invalid_message_id(self, message_id):
        with pytest.raises(ConfigurationError, match="message id"):
            MessageSchema(message_id, (FieldSpec("value", "%f32"),))

    def test_invalid_talker_pattern(self):
        with pytest.raises(ConfigurationError, match="talker id pattern"):
            MessageSchema("ABC", (FieldSpec("value", "%f32"),), talker_id_pattern="[")

    def test_no_fields(self):
        with pytest.raises(ConfigurationError, match="no fields"):
            MessageSchema("ABC", ())

    def test_duplicate_field_names(self):
        with pytest.raises(ConfigurationError, match="repeats field names"):
            MessageSchema("ABC", (FieldSpec("value", "%f32"), FieldSpec("value", "%u8")))

    def test_accepts(self):
        heading, fix = extract_sentences(
            "$GPHDT,274.07,T*03 $GNGGA,123519.00,,,,,0,00,,,,,,,*5B"
        )
        assert HDT.accepts(heading)
        assert not HDT.accepts(fix)
        assert GGA.accepts(fix)

    def test_accepts_restricted_talker(self):
        schema = MessageSchema(
            "HDT", (FieldSpec("heading", "%f32 T"),), talker_id_pattern="GN"
        )
        (sentence,) = extract_sentences("$GPHDT,274.07,T*03")
        assert not schema.accepts(sentence)


class TestValidateCatalog:
    """Tests for validate_catalog function."""

    def test_returns_list_in_order(self):
        assert validate_catalog(iter([VTG, GGA])) == [VTG, GGA]

    def test_duplicate_message_id(self):
        renamed = MessageSchema("GGA", GGA.fields, name="OTHER")
        with pytest.raises(ConfigurationError, match="message_id 'GGA'"):
            validate_catalog([GGA, renamed])

    def test_duplicate_name(self):
        other = MessageSchema("HDG", HDT.fields, name="HDT")
        with pytest.raises(ConfigurationError, match="name 'HDT'"):
            validate_catalog([HDT, other])
