"""Tests for the document payload type and timestamps."""

from datetime import datetime, timezone

from docsync.document import BUFFER_FIELD, Document, is_newer, isoformat, parse_timestamp


class TestTimestamps:
    def test_isoformat_utc_z_suffix(self):
        moment = datetime(2024, 3, 1, 8, 30, 15, 123456, tzinfo=timezone.utc)
        assert isoformat(moment) == "2024-03-01T08:30:15.123Z"

    def test_parse_z_suffix(self):
        parsed = parse_timestamp("2024-03-01T08:30:15.123Z")
        assert parsed == datetime(2024, 3, 1, 8, 30, 15, 123000, tzinfo=timezone.utc)

    def test_parse_invalid(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(12345) is None

    def test_is_newer(self):
        assert is_newer("2024-01-02T00:00:00.000Z", "2024-01-01T00:00:00.000Z")
        assert not is_newer("2024-01-01T00:00:00.000Z", "2024-01-02T00:00:00.000Z")
        assert not is_newer("2024-01-01T00:00:00.000Z", "2024-01-01T00:00:00.000Z")

    def test_is_newer_compares_instants_not_strings(self):
        assert is_newer("2024-01-01T10:00:00+02:00", "2024-01-01T07:30:00.000Z")

    def test_missing_timestamp_is_never_newer(self):
        assert not is_newer(None, "2024-01-01T00:00:00.000Z")
        assert not is_newer("2024-01-01T00:00:00.000Z", None)


class TestDocument:
    def test_accessors(self):
        doc = Document(
            title="Intro",
            content="Hello",
            createdAt="2024-01-01T00:00:00.000Z",
            extra={"kept": True},
        )
        assert doc.title == "Intro"
        assert doc.content == "Hello"
        assert doc.created_at == "2024-01-01T00:00:00.000Z"
        assert doc.updated_at is None
        assert doc["extra"] == {"kept": True}

    def test_defaults_when_missing(self):
        doc = Document()
        assert doc.title == ""
        assert doc.content == ""
        assert doc.in_buffer is False

    def test_buffer_state(self):
        doc = Document(title="x").with_buffer_state(True)
        assert doc[BUFFER_FIELD] == {"inBuffer": True}
        assert doc.in_buffer is True
        assert doc.with_buffer_state(False).in_buffer is False

    def test_without_buffer_state_copies(self):
        doc = Document(title="x").with_buffer_state(True)
        stripped = doc.without_buffer_state()
        assert BUFFER_FIELD not in stripped
        assert BUFFER_FIELD in doc
        assert stripped == {"title": "x"}
