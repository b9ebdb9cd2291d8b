"""Tests for sentence extraction."""

from navdecode import extract_sentences
from tests.helpers import GGA_SENTENCE, VTG_SENTENCE, make_sentence

HDT_SENTENCE = "$GPHDT,274.07,T*03"


class TestExtractSentences:
    """Tests for extract_sentences function."""

    def test_single_sentence(self):
        sentences = extract_sentences(HDT_SENTENCE)
        assert len(sentences) == 1
        sentence = sentences[0]
        assert sentence.talker_id == "GP"
        assert sentence.message_id == "HDT"
        assert sentence.content == ",274.07,T"
        assert sentence.checksum == "03"
        assert sentence.source_offset == 0

    def test_text_reconstructs_sentence(self):
        assert extract_sentences(HDT_SENTENCE)[0].text == HDT_SENTENCE

    def test_surrounding_noise(self):
        text = "garbage" + HDT_SENTENCE + "\r\nmore garbage"
        sentences = extract_sentences(text)
        assert [s.message_id for s in sentences] == ["HDT"]
        assert sentences[0].source_offset == len("garbage")

    def test_order_and_offsets(self):
        text = GGA_SENTENCE + "\r\n" + VTG_SENTENCE + "\r\n"
        sentences = extract_sentences(text)
        assert [s.message_id for s in sentences] == ["GGA", "VTG"]
        assert [s.source_offset for s in sentences] == [0, len(GGA_SENTENCE) + 2]

    def test_sentences_on_one_line(self):
        sentences = extract_sentences(HDT_SENTENCE + HDT_SENTENCE)
        assert [s.source_offset for s in sentences] == [0, len(HDT_SENTENCE)]

    def test_empty_content(self):
        sentence = make_sentence("GPXYZ")
        sentences = extract_sentences(sentence)
        assert len(sentences) == 1
        assert sentences[0].content == ""

    def test_empty_fields_kept(self):
        sentence = make_sentence("GPROT,,,")
        assert extract_sentences(sentence)[0].content == ",,,"

    def test_lowercase_checksum_captured(self):
        assert extract_sentences("$GPHDT,274.07,T*0a")[0].checksum == "0a"

    def test_no_sentences(self):
        assert extract_sentences("") == []
        assert extract_sentences("no nmea here") == []

    def test_missing_checksum_delimiter(self):
        assert extract_sentences("$GPHDT,274.07,T03") == []

    def test_truncated_checksum(self):
        assert extract_sentences("$GPHDT,274.07,T*0") == []

    def test_wrong_talker_id_length(self):
        assert extract_sentences("$GHDT,274.07,T*03") == []
        assert extract_sentences("$G1HDT,274.07,T*03") == []

    def test_line_break_inside_sentence(self):
        assert extract_sentences("$GPHDT,274.07\n,T*03") == []

    def test_truncated_sentence_followed_by_valid_one(self):
        text = "$GPGGA,123519,4807.0" + HDT_SENTENCE
        sentences = extract_sentences(text)
        assert [s.message_id for s in sentences] == ["HDT"]
        assert sentences[0].source_offset == len("$GPGGA,123519,4807.0")

    def test_bytes_input(self):
        sentences = extract_sentences(b"\xff\xfe" + HDT_SENTENCE.encode("ascii"))
        assert [s.message_id for s in sentences] == ["HDT"]

    def test_bytes_lines(self):
        lines = [b"\xff" + HDT_SENTENCE.encode("ascii") + b"\r\n", b"noise\r\n"]
        sentences = extract_sentences(lines)
        assert [s.message_id for s in sentences] == ["HDT"]
        assert sentences[0].source_offset == 0

    def test_chunks_use_their_own_offsets(self):
        lines = [HDT_SENTENCE + "\r\n", "xx" + VTG_SENTENCE + "\r\n"]
        sentences = extract_sentences(lines)
        assert [s.message_id for s in sentences] == ["HDT", "VTG"]
        assert [s.source_offset for s in sentences] == [0, 2]

    def test_vendor_talker_pattern(self):
        sentence = make_sentence("PSAT,HPR,123519.00,274.1,-1.5,0.3,N")
        assert extract_sentences(sentence) == []
        sentences = extract_sentences(sentence, talker_id_pattern="PSAT,")
        assert len(sentences) == 1
        assert sentences[0].talker_id == "PSAT,"
        assert sentences[0].message_id == "HPR"
        assert sentences[0].content == ",123519.00,274.1,-1.5,0.3,N"

    def test_checksums_not_verified(self):
        corrupted = HDT_SENTENCE[:-2] + "FF"
        assert len(extract_sentences(corrupted)) == 1
