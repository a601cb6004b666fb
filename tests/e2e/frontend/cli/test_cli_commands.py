"""End-to-end tests of the `now`, `format`, `parse` and `dst` commands.

The engine runs on a clock frozen at Wednesday, January 10, 2024 12:00 UTC in
a UTC process, with English names (see the `invoke` fixture).
"""

import pytest

pytestmark = pytest.mark.e2e

RFC822_EXAMPLE = "Sat, 18 Dec 1999 00:48:30 +0100"
RFC822_MILLIS = 945_474_510_000


def lines(result) -> list[str]:
    """Return the non-empty output lines of ``result``."""
    return [line for line in result.output.splitlines() if line.strip()]


class TestNow:
    """almanac now"""

    @staticmethod
    def test_default_template(invoke) -> None:
        """%c with English names."""
        result = invoke(["now"])
        assert result.exit_code == 0
        assert lines(result) == ["Wed Jan 10 12:00:00 2024"]

    @staticmethod
    @pytest.mark.parametrize(
        "tz, expected",
        [("local", "12:00"), ("UTC", "12:00"), ("+09:30", "21:30"), ("-0500", "07:00")],
    )
    def test_time_zones(invoke, tz: str, expected: str) -> None:
        """The wall clock follows --tz."""
        result = invoke(["now", "-t", "%H:%M", "--tz", tz])
        assert result.exit_code == 0
        assert lines(result) == [expected]

    @staticmethod
    def test_unknown_zone(invoke) -> None:
        """Unknown zone names are usage errors."""
        result = invoke(["now", "--tz", "Mars/Olympus"])
        assert result.exit_code == 2


class TestFormat:
    """almanac format"""

    @staticmethod
    def test_instant(invoke) -> None:
        """MILLIS is read as milliseconds since the epoch."""
        result = invoke(["format", str(RFC822_MILLIS), "-t", "%Y-%m-%d %H:%M:%S.%l"])
        assert result.exit_code == 0
        assert lines(result) == ["1999-12-17 23:48:30.000"]

    @staticmethod
    def test_before_the_epoch(invoke) -> None:
        """Negative values are dates before 1970."""
        result = invoke(["format", "-t", "%A %d %B %Y", "--", "-86400000"])
        assert result.exit_code == 0
        assert lines(result) == ["Wednesday 31 December 1969"]

    @staticmethod
    def test_unknown_specifier_is_copied(invoke) -> None:
        """Without --strict the specifier is copied through with a warning."""
        result = invoke(["format", "0", "-t", "%Y%q"])
        assert result.exit_code == 0
        assert "1970q" in result.output
        assert "Unknown format specifier" in result.output

    @staticmethod
    def test_unknown_specifier_strict(invoke) -> None:
        """With --strict it ends the command."""
        result = invoke(["format", "0", "-t", "%Y%q", "--strict"])
        assert result.exit_code == 1
        assert "1970q" not in result.output


class TestParse:
    """almanac parse"""

    @staticmethod
    def test_rfc822(invoke) -> None:
        """RFC 822 dates are printed on the wall clock of their offset."""
        result = invoke(["parse", "--mode", "rfc822", RFC822_EXAMPLE])
        assert result.exit_code == 0
        assert lines(result) == ["1999-12-18 00:48:30"]

    @staticmethod
    def test_millis(invoke) -> None:
        """--millis prints milliseconds since the epoch."""
        result = invoke(["parse", "--mode", "RFC822", "--millis", RFC822_EXAMPLE])
        assert result.exit_code == 0
        assert lines(result) == [str(RFC822_MILLIS)]

    @staticmethod
    def test_template(invoke) -> None:
        """--mode format reads TEXT with the -t template."""
        result = invoke(["parse", "--mode", "format", "-t", "%d %B %Y", "5 March 2024"])
        assert result.exit_code == 0
        assert lines(result) == ["2024-03-05 00:00:00"]

    @staticmethod
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("tomorrow", "2024-01-11 00:00:00"),
            ("Jan 15 2025", "2025-01-15 00:00:00"),
            ("03/04/2024", "2024-03-04 00:00:00"),
        ],
    )
    def test_free_text(invoke, text: str, expected: str) -> None:
        """Free text is the default mode; today is January 10, 2024."""
        result = invoke(["parse", text])
        assert result.exit_code == 0
        assert lines(result) == [expected]

    @staticmethod
    def test_time_of_day(invoke) -> None:
        """--mode time keeps today's date."""
        result = invoke(["parse", "--mode", "time", "10:30"])
        assert result.exit_code == 0
        assert lines(result) == ["2024-01-10 10:30:00"]

    @staticmethod
    def test_output_template(invoke) -> None:
        """-o changes how the result is printed."""
        result = invoke(["parse", "-o", "%A", "tomorrow"])
        assert result.exit_code == 0
        assert lines(result) == ["Thursday"]

    @staticmethod
    def test_trailing_text_is_reported(invoke) -> None:
        """Unparsed text is reported but the command succeeds."""
        result = invoke(["parse", "15 Jan and more"])
        assert result.exit_code == 0
        assert "2024-01-15 00:00:00" in result.output
        assert "Ignored trailing text: ' and more'" in result.output

    @staticmethod
    @pytest.mark.parametrize(
        "args",
        [
            ["--mode", "rfc822", "Sat, 31 Feb 1999 00:48:30 +0100"],
            ["--mode", "time", "teatime"],
            ["hello"],
        ],
        ids=["rfc822", "time", "free"],
    )
    def test_unparsable_text(invoke, args: list[str]) -> None:
        """Parse failures are errors with exit status 1."""
        result = invoke(["parse", *args])
        assert result.exit_code == 1
        assert "[X]" in result.output or "❌" in result.output

    @staticmethod
    def test_unknown_mode(invoke) -> None:
        """Modes are a fixed choice."""
        result = invoke(["parse", "--mode", "iso", "2024"])
        assert result.exit_code == 2


class TestDst:
    """almanac dst"""

    @staticmethod
    def test_guessed_country(invoke) -> None:
        """In UTC the country is guessed as the USA."""
        result = invoke(["dst", "2024"])
        assert result.exit_code == 0
        out = lines(result)
        assert out[:3] == [
            "country : USA",
            "begin   : 2024-04-07 02:00:00",
            "end     : 2024-10-27 02:00:00",
        ]
        assert out[3].startswith("length  : ")

    @staticmethod
    def test_country_option(invoke) -> None:
        """European transitions happen at 01:00 UTC."""
        result = invoke(["dst", "2024", "--country", "France", "--tz", "UTC"])
        assert result.exit_code == 0
        assert lines(result)[:3] == [
            "country : FRANCE",
            "begin   : 2024-03-31 01:00:00",
            "end     : 2024-10-27 01:00:00",
        ]

    @staticmethod
    def test_window_length(invoke) -> None:
        """The length is printed in days, hours and minutes."""
        result = invoke(["dst", "2024", "--country", "france"])
        assert result.exit_code == 0
        assert lines(result)[3] == "length  : 210 days 00:00"

    @staticmethod
    def test_not_observed(invoke) -> None:
        """Years without DST are reported, not failed."""
        result = invoke(["dst", "1930", "--country", "usa"])
        assert result.exit_code == 0
        assert "DST is not observed in 1930 in USA." in result.output
        assert "begin" not in result.output

    @staticmethod
    def test_unknown_country(invoke) -> None:
        """Unknown countries are usage errors."""
        result = invoke(["dst", "2024", "--country", "atlantis"])
        assert result.exit_code == 2
        assert "usa" in result.output
