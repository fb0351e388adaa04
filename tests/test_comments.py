"""Tests for the comment log format and its tolerant parser."""

from datetime import timedelta, timezone

from pippin.core.comments import append_entry, format_entry, parse_log

from conftest import utc


def test_first_entry_has_no_separator():
    log = append_entry("", "hello", utc(2025, 1, 10, 9, 30))
    assert log == "[2025-01-10 09:30:00] hello"


def test_entries_joined_by_newline():
    log = append_entry(None, "one", utc(2025, 1, 10, 9))
    log = append_entry(log, "two", utc(2025, 1, 10, 10))
    assert log == "[2025-01-10 09:00:00] one\n[2025-01-10 10:00:00] two"


def test_timestamp_rendered_in_utc():
    plus_two = timezone(timedelta(hours=2))
    stamp = utc(2025, 1, 10, 12).astimezone(plus_two)
    assert format_entry("x", stamp).startswith("[2025-01-10 12:00:00]")


def test_parse_round_trip_preserves_order_and_text():
    log = append_entry("", "first: with [brackets]", utc(2025, 1, 10, 9))
    log = append_entry(log, "  second", utc(2025, 1, 10, 9))

    entries = parse_log(log)

    assert [e.text for e in entries] == ["first: with [brackets]", "  second"]
    assert entries[0].timestamp == utc(2025, 1, 10, 9)
    assert entries[0].timestamp <= entries[1].timestamp


def test_empty_log_parses_to_nothing():
    assert parse_log("") == []
    assert parse_log(None) == []


def test_unparsable_lines_are_kept_verbatim():
    log = "\n".join(
        [
            "[2025-01-10 09:00:00] ok",
            "legacy note without a stamp",
            "[2025-13-40 99:00:00] impossible date",
            "[yesterday] loose",
        ]
    )

    entries = parse_log(log)

    assert len(entries) == 4
    assert entries[0].parsed and entries[0].text == "ok"
    for entry, line in zip(entries[1:], log.split("\n")[1:]):
        assert entry.timestamp is None
        assert entry.text == line
