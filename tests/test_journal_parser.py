"""Tests for journal_parser.py — block splitting, slot interpreters, assembly."""

from datetime import datetime, timezone

import pytest

from daylog.models.journal import (
    INVALID_DATE,
    JournalEntry,
    Medication,
    Routines,
    SleepSchedule,
)
from daylog.services.journal_parser import (
    format_entry,
    format_journal,
    normalize_lines,
    parse_block,
    parse_date,
    parse_journal,
    parse_medication,
    parse_routines,
    parse_sleep_schedule,
    parse_substances,
    parse_time,
    split_blocks,
)


def _utc(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


SCENARIO = "01.02.24,note\nnone\nno\nyes, yes, yes\n8.00 and 1.00\n\n"


# ---------------------------------------------------------------------------
# Block splitter & line normalizer
# ---------------------------------------------------------------------------

class TestSplitBlocks:
    """Tests for split_blocks()."""

    def test_empty_input(self):
        assert split_blocks("") == []

    def test_whitespace_only_input(self):
        assert split_blocks("   \n\n \t \n\n") == []

    def test_blank_and_whitespace_blocks_dropped(self):
        text = "A\n\n\n\nB\n\n   \n\nC"
        assert split_blocks(text) == ["A", "B", "C"]

    def test_keeps_order_of_appearance(self):
        assert split_blocks("first\nx\n\nsecond\ny") == ["first\nx", "second\ny"]

    def test_crlf_line_endings(self):
        assert split_blocks("A\r\nb\r\n\r\nB") == ["A\nb", "B"]

    def test_three_newlines_leave_leading_break_on_next_block(self):
        assert split_blocks("A\n\n\nB") == ["A", "\nB"]


class TestNormalizeLines:
    """Tests for normalize_lines()."""

    def test_trims_whitespace(self):
        assert normalize_lines("  01.02.24, x  \n\tnone ") == ["01.02.24, x", "none"]

    def test_strips_misencoded_bullet(self):
        assert normalize_lines("â€¢ 01.02.24, x\n   â€¢   none  ") == ["01.02.24, x", "none"]

    def test_strips_plain_bullet(self):
        assert normalize_lines("• yes, no, yes") == ["yes, no, yes"]

    def test_only_leading_bullet_removed(self):
        assert normalize_lines("wine â€¢ beer") == ["wine â€¢ beer"]

    def test_blank_lines_kept_in_position(self):
        assert normalize_lines("a\n \nc") == ["a", "", "c"]


# ---------------------------------------------------------------------------
# Date
# ---------------------------------------------------------------------------

class TestParseDate:
    """Tests for parse_date()."""

    def test_basic(self):
        assert parse_date("01.02.24, thursday") == _utc(2024, 2, 1)

    def test_midnight_utc(self):
        d = parse_date("15.11.24")
        assert (d.hour, d.minute, d.second, d.microsecond) == (0, 0, 0, 0)
        assert d.tzinfo == timezone.utc

    def test_only_text_before_first_comma_used(self):
        assert parse_date("05.03.24, 06.04.25, x") == _utc(2024, 3, 5)

    def test_spaces_around_tokens(self):
        assert parse_date(" 01 . 02 . 24 , x") == _utc(2024, 2, 1)

    def test_single_digit_tokens(self):
        assert parse_date("1.2.24") == _utc(2024, 2, 1)

    def test_missing_year(self):
        assert parse_date("24.11.,foo") is INVALID_DATE

    def test_missing_token(self):
        assert parse_date("01.02") is INVALID_DATE

    def test_non_numeric(self):
        assert parse_date("aa.bb.cc") is INVALID_DATE

    def test_empty_line(self):
        assert parse_date("") is INVALID_DATE

    def test_text_without_comma_spoils_year(self):
        assert parse_date("01.02.24 thursday") is INVALID_DATE

    def test_day_overflow_rolls_into_next_month(self):
        assert parse_date("31.02.24") == _utc(2024, 3, 2)

    def test_day_zero_is_last_day_of_previous_month(self):
        assert parse_date("0.01.24") == _utc(2023, 12, 31)

    def test_month_overflow_rolls_into_next_year(self):
        assert parse_date("01.13.24") == _utc(2025, 1, 1)

    def test_huge_values_are_invalid(self):
        assert parse_date("1.1.99999999") is INVALID_DATE

    def test_underscore_separator_rejected(self):
        assert parse_date("1_0.02.24") is INVALID_DATE

    def test_non_ascii_digits_rejected(self):
        # Arabic-Indic 1.2.24
        assert parse_date("\u0661.\u0662.\u0662\u0664") is INVALID_DATE

    def test_signed_tokens_accepted(self):
        assert parse_date("+1.2.24") == _utc(2024, 2, 1)


# ---------------------------------------------------------------------------
# Substances & medication
# ---------------------------------------------------------------------------

class TestParseSubstances:
    """Tests for parse_substances()."""

    def test_lowercases(self):
        assert parse_substances("1 Beer, Half A Bottle Of Wine") == "1 beer, half a bottle of wine"

    def test_empty_is_none(self):
        assert parse_substances("") is None


class TestParseMedication:
    """Tests for parse_medication() rule priority."""

    @pytest.mark.parametrize("line, expected", [
        ("no", Medication(None, "No")),
        ("NO", Medication(None, "No")),
        ("5 mtp", Medication(5, "MTP")),
        ("5mwo", Medication(5, "MWO")),
        ("12  MTP", Medication(12, "MTP")),
        ("mwo", Medication(None, "MWO")),
        ("took mtp today", Medication(None, "MTP")),
        ("", Medication(None, None)),
        ("yes", Medication(None, None)),
    ])
    def test_rules(self, line, expected):
        assert parse_medication(line) == expected

    def test_no_must_be_exact(self):
        assert parse_medication("no mtp") == Medication(None, "MTP")
        assert parse_medication("nope") == Medication(None, None)

    def test_first_counted_match_wins(self):
        assert parse_medication("2 mtp and 1 mwo") == Medication(2, "MTP")

    def test_counted_beats_bare_mention(self):
        assert parse_medication("mtp then 3 mwo") == Medication(3, "MWO")

    def test_non_ascii_amount_is_not_counted(self):
        assert parse_medication("\u0665 mtp") == Medication(None, "MTP")

    def test_amount_only_with_mtp_or_mwo(self):
        for line in ("no", "mtp", "mwo", "", "3 pills"):
            result = parse_medication(line)
            if result.amount is not None:
                assert result.type in ("MTP", "MWO")


# ---------------------------------------------------------------------------
# Routines
# ---------------------------------------------------------------------------

class TestParseRoutines:
    """Tests for parse_routines()."""

    def test_three_parts(self):
        assert parse_routines("yes, no, yes") == Routines(True, False, True)

    def test_case_and_spacing(self):
        assert parse_routines("YES,Yes ,  nope") == Routines(True, True, False)

    def test_two_parts_all_none(self):
        assert parse_routines("yes, no") == Routines(None, None, None)

    def test_four_parts_all_none(self):
        assert parse_routines("yes, yes, yes, yes") == Routines(None, None, None)

    def test_empty(self):
        assert parse_routines("") == Routines(None, None, None)

    def test_empty_parts_count(self):
        assert parse_routines(",,") == Routines(False, False, False)


# ---------------------------------------------------------------------------
# Sleep schedule
# ---------------------------------------------------------------------------

class TestParseTime:
    """Tests for parse_time() rule order."""

    @pytest.mark.parametrize("token, expected", [
        ("1.3", "1:30"),
        ("8.15", "8:15"),
        ("1.05", "1:05"),
        ("8:15", "8:15"),
        ("8:5", "8:5"),
        ("3", "3:00"),
        ("around 11.3 pm", "11:30"),
        ("late", None),
        ("", None),
    ])
    def test_tokens(self, token, expected):
        assert parse_time(token) == expected

    def test_dotted_tried_before_bare_hour(self):
        assert parse_time("12.4") == "12:40"

    def test_non_ascii_digits_are_not_times(self):
        assert parse_time("\u0663") is None
        assert parse_time("\u0661.\u0663") is None


class TestParseSleepSchedule:
    """Tests for parse_sleep_schedule()."""

    def test_two_dotted_times(self):
        assert parse_sleep_schedule("1.3 and 8.15") == SleepSchedule("1:30", "8:15")

    def test_single_token(self):
        assert parse_sleep_schedule("3") == SleepSchedule("3:00", None)

    def test_mixed_formats(self):
        assert parse_sleep_schedule("23:45 and 7") == SleepSchedule("23:45", "7:00")

    def test_uppercase_and(self):
        assert parse_sleep_schedule("1.3 AND 8") == SleepSchedule("1:30", "8:00")

    def test_unparseable_first_token(self):
        assert parse_sleep_schedule("late and 9.30") == SleepSchedule(None, "9:30")

    def test_missing_first_token(self):
        assert parse_sleep_schedule("and 7") == SleepSchedule(None, "7:00")

    def test_extra_tokens_ignored(self):
        assert parse_sleep_schedule("1 and 2 and 3") == SleepSchedule("1:00", "2:00")

    def test_empty(self):
        assert parse_sleep_schedule("") == SleepSchedule(None, None)

    def test_fell_asleep_is_morning_field(self):
        schedule = parse_sleep_schedule("2.30 and 9")
        assert schedule.morning == "2:30"
        assert schedule.night == "9:00"


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

class TestParseJournal:
    """Tests for parse_block() / parse_journal()."""

    def test_scenario(self):
        entries = parse_journal(SCENARIO)
        assert entries == [JournalEntry(
            date=_utc(2024, 2, 1),
            substances="none",
            medication=Medication(None, "No"),
            routines=Routines(True, True, True),
            sleep_schedule=SleepSchedule("8:00", "1:00"),
            description=None,
            feelings=None,
        )]

    def test_empty_text(self):
        assert parse_journal("") == []

    def test_block_count(self):
        text = "01.01.24,\nnone\n\n\n\n02.01.24,\n\n   \n\n03.01.24,"
        assert len(parse_journal(text)) == len(split_blocks(text)) == 3

    def test_reversed_order(self):
        a = "01.01.24, a\nnone\nno"
        b = "02.01.24, b\n1 beer\n2 mtp"
        assert parse_journal(a + "\n\n" + b) == [parse_block(b), parse_block(a)]

    def test_reversal_is_not_a_date_sort(self):
        later = "10.01.24,\nnone"
        earlier = "01.01.24,\nnone"
        dates = [e.date for e in parse_journal(later + "\n\n" + earlier)]
        assert dates == [_utc(2024, 1, 1), _utc(2024, 1, 10)]

    def test_invalid_date_keeps_reversed_position(self):
        text = "01.01.24,\nnone\n\nbad date\nwine\n\n03.01.24,\nno"
        entries = parse_journal(text)
        assert [e.substances for e in entries] == ["no", "wine", "none"]
        assert entries[1].date is INVALID_DATE

    def test_missing_lines_become_none(self):
        entry = parse_block("01.02.24, only a date")
        assert entry.substances is None
        assert entry.medication == Medication(None, None)
        assert entry.routines == Routines(None, None, None)
        assert entry.sleep_schedule == SleepSchedule(None, None)
        assert entry.description is None
        assert entry.feelings is None

    def test_description_and_feelings_keep_case(self):
        block = "01.02.24,\nnone\nno\nyes, yes, yes\n1 and 8\nWent Hiking\nCalm, Happy"
        entry = parse_block(block)
        assert entry.description == "Went Hiking"
        assert entry.feelings == "Calm, Happy"

    def test_lines_past_feelings_ignored(self):
        block = "01.02.24,\nnone\nno\nyes, yes, yes\n1 and 8\nd\nf\nextra"
        assert parse_block(block).feelings == "f"

    def test_bulleted_block(self):
        block = "â€¢ 01.02.24, x\nâ€¢ none\nâ€¢ 2 mtp\nâ€¢ yes, no, no\nâ€¢ 1.3 and 8"
        entry = parse_block(block)
        assert entry.date == _utc(2024, 2, 1)
        assert entry.medication == Medication(2, "MTP")
        assert entry.routines == Routines(True, False, False)
        assert entry.sleep_schedule == SleepSchedule("1:30", "8:00")

    def test_malformed_date_entry_fails_range_filter(self):
        entry = parse_journal("24.11.,foo\nnone")[0]
        real = _utc(2000, 1, 1)
        assert not entry.date >= real
        assert not real <= entry.date
        assert not entry.on_or_after(real)

    def test_garbage_never_raises(self):
        text = "\x00\n::\n12345678901234567890 mtp\n,,,,\n.......\n\n🙂"
        entries = parse_journal(text)
        assert len(entries) == 2
        assert entries[1].medication == Medication(12345678901234567890, "MTP")


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _full_entry(**overrides):
    fields = dict(
        date=_utc(2024, 3, 5),
        substances="1 beer",
        medication=Medication(2, "MTP"),
        routines=Routines(True, False, True),
        sleep_schedule=SleepSchedule("1:30", "8:15"),
        description="Long day at work",
        feelings="Tired but fine",
    )
    fields.update(overrides)
    return JournalEntry(**fields)


class TestFormatEntry:
    """Tests for format_entry() and the per-entry round trip."""

    def test_layout(self):
        assert format_entry(_full_entry()) == (
            "05.03.24,\n1 beer\n2 mtp\nyes, no, yes\n1:30 and 8:15\nLong day at work\nTired but fine"
        )

    @pytest.mark.parametrize("overrides", [
        {},
        {"medication": Medication(None, "No")},
        {"medication": Medication(None, "MWO")},
        {"routines": Routines(False, False, False)},
        {"feelings": None},
        {"description": None, "feelings": None},
    ])
    def test_round_trip(self, overrides):
        entry = _full_entry(**overrides)
        assert parse_journal(format_entry(entry)) == [entry]

    def test_format_journal_round_trip(self):
        entries = [_full_entry(date=_utc(2024, 3, 6)), _full_entry()]
        assert parse_journal(format_journal(entries)) == entries

    def test_trailing_empty_lines_dropped(self):
        entry = JournalEntry(date=_utc(2024, 1, 1), substances="none")
        assert format_entry(entry) == "01.01.24,\nnone"
