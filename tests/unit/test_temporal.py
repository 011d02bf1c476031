"""Unit tests for date/time expression resolution."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from iljeong.commands.temporal import (
    DEFAULT_TIMEZONE,
    ResolvedDateTime,
    current_date,
    is_valid_timezone,
    localize,
    resolve,
    resolve_bare_hour,
    tomorrow_date,
)

SEOUL = ZoneInfo("Asia/Seoul")
# Wednesday
REFERENCE = datetime(2025, 1, 1, 10, 0, tzinfo=SEOUL)


class TestDateKeywords:
    """Tests for relative-day keywords."""

    def test_no_keyword_uses_reference_date(self) -> None:
        """Test that plain times stay on the reference date."""
        assert resolve("3시", REFERENCE).date == "2025-01-01"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("내일 3시", "2025-01-02"),
            ("tomorrow 3시", "2025-01-02"),
            ("모레 3시", "2025-01-03"),
            ("다음주 3시", "2025-01-08"),
            ("다음 주 3시", "2025-01-08"),
            ("next week 3시", "2025-01-08"),
        ],
    )
    def test_relative_days(self, text: str, expected: str) -> None:
        """Test day offsets for each keyword."""
        assert resolve(text, REFERENCE).date == expected

    def test_reference_date_is_taken_in_timezone(self) -> None:
        """Test that the reference instant is converted before taking the date."""
        # 16:00 UTC is already 01:00 the next day in Seoul
        utc_now = datetime(2025, 1, 1, 16, 0, tzinfo=UTC)
        assert resolve("3시", utc_now, "Asia/Seoul").date == "2025-01-02"
        assert resolve("3시", utc_now, "UTC").date == "2025-01-01"


class TestTimePatterns:
    """Tests for explicit time extraction."""

    def test_hour_and_minute(self) -> None:
        """Test 'H시 M분'."""
        assert resolve("2시 30분", REFERENCE).time == "14:30"

    def test_colon_time(self) -> None:
        """Test 'H:M'."""
        assert resolve("14:30", REFERENCE).time == "14:30"

    def test_half_hour(self) -> None:
        """Test that 반 adds thirty minutes."""
        assert resolve("2시반", REFERENCE).time == "14:30"
        assert resolve("10시 반", REFERENCE).time == "10:30"

    def test_no_time_defaults_to_nine(self) -> None:
        """Test the 09:00 fallback."""
        assert resolve("내일", REFERENCE) == ResolvedDateTime("2025-01-02", "09:00")

    def test_out_of_range_hour_falls_back(self) -> None:
        """Test that an impossible hour is not used."""
        assert resolve("25시", REFERENCE).time == "09:00"

    def test_times_are_zero_padded(self) -> None:
        """Test HH:MM formatting."""
        result = resolve("오전 8시 5분", REFERENCE)
        assert result.time == "08:05"
        assert result.hour == 8
        assert result.minute == 5


class TestDisambiguation:
    """Tests for time-of-day keywords and the business-hours bias."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("내일 저녁 7시", "19:00"),
            ("저녁 8시", "20:00"),
            ("아침 8시", "08:00"),
            ("저녁 12시", "12:00"),
            ("저녁 19시", "19:00"),
            ("아침 7시", "07:00"),
            ("아침 12시", "00:00"),
            ("점심", "12:00"),
            ("오후 2시", "14:00"),
            ("오후 12시", "12:00"),
            ("오전 9시", "09:00"),
            ("오전 12시", "00:00"),
            ("3:15pm", "15:15"),
            ("11:00 AM", "11:00"),
            ("새벽 3시", "03:00"),
        ],
    )
    def test_keywords(self, text: str, expected: str) -> None:
        """Test each keyword rule."""
        assert resolve(text, REFERENCE).time == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1시", "13:00"),
            ("3시", "15:00"),
            ("7시", "19:00"),
            ("8시", "08:00"),
            ("9시", "09:00"),
            ("12시", "12:00"),
            ("0시", "00:00"),
        ],
    )
    def test_business_hours_bias(self, text: str, expected: str) -> None:
        """Test that bare 1-7 is read as afternoon or evening."""
        assert resolve(text, REFERENCE).time == expected

    def test_latin_words_are_not_markers(self) -> None:
        """Test that 'team' is not read as AM."""
        assert resolve("team 3:00", REFERENCE).time == "15:00"

    def test_first_keyword_wins(self) -> None:
        """Test that 저녁 takes precedence over 오전."""
        assert resolve("오전 저녁 7시", REFERENCE).time == "19:00"


class TestResolveBareHour:
    """Tests for resolve_bare_hour."""

    @pytest.mark.parametrize("hour,expected", [(3, 15), (9, 9), (12, 12), (0, 0), (7, 19)])
    def test_bias_only(self, hour: int, expected: int) -> None:
        """Test that only the bias rule applies."""
        assert resolve_bare_hour(hour) == expected


class TestRobustness:
    """Tests that the resolver never raises."""

    @pytest.mark.parametrize("text", ["", "   ", "asdf", "\"\"", "99:99", "시시시"])
    def test_garbage_input(self, text: str) -> None:
        """Test that unparseable input falls back to reference date at 09:00."""
        assert resolve(text, REFERENCE) == ResolvedDateTime("2025-01-01", "09:00")

    def test_unknown_timezone_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test fallback to the default zone with a warning."""
        result = resolve("3시", REFERENCE, "Mars/Olympus_Mons")
        assert result == ResolvedDateTime("2025-01-01", "15:00")
        assert "Unknown timezone" in caplog.text

    def test_naive_reference_is_local(self) -> None:
        """Test that a naive reference is read as wall-clock time."""
        naive = datetime(2025, 1, 1, 23, 30)
        assert localize(naive, "Asia/Seoul") == datetime(2025, 1, 1, 23, 30, tzinfo=SEOUL)
        assert resolve("내일", naive).date == "2025-01-02"


class TestHelpers:
    """Tests for date helpers and ResolvedDateTime."""

    def test_to_datetime(self) -> None:
        """Test combining into an aware datetime."""
        resolved = resolve("내일 저녁 7시", REFERENCE)
        assert resolved.to_datetime("Asia/Seoul") == datetime(2025, 1, 2, 19, 0, tzinfo=SEOUL)

    def test_current_and_tomorrow_date(self) -> None:
        """Test date strings in a timezone."""
        now = datetime(2025, 1, 1, 16, 0, tzinfo=UTC)
        assert current_date("Asia/Seoul", now) == "2025-01-02"
        assert tomorrow_date("Asia/Seoul", now) == "2025-01-03"
        assert current_date("UTC", now) == "2025-01-01"

    def test_is_valid_timezone(self) -> None:
        """Test timezone name validation."""
        assert DEFAULT_TIMEZONE == "Asia/Seoul"
        assert is_valid_timezone("Asia/Seoul")
        assert is_valid_timezone("America/New_York")
        assert not is_valid_timezone("Not/AZone")
