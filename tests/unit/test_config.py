"""Unit tests for the engine settings and their environment variables."""

import pytest

from almanac import config
from almanac.config import EngineSettings, InvalidCountryError, InvalidSettingError
from almanac.domain.value_objects import Country, WeekFlags


class TestEngineSettings:
    """Tests for the settings value object."""

    @staticmethod
    def test_defaults() -> None:
        """Nothing configured: guess the country, default week start, pivot 30."""
        settings = EngineSettings()
        assert settings.country is Country.UNKNOWN
        assert settings.week_start is WeekFlags.DEFAULT_FIRST
        assert settings.native_years == (1970, 2037)
        assert settings.year_pivot == 30

    @staticmethod
    def test_with_country() -> None:
        """A copy is returned; the original is untouched."""
        settings = EngineSettings()
        assert settings.with_country(Country.UK).country is Country.UK
        assert settings.country is Country.UNKNOWN

    @staticmethod
    @pytest.mark.parametrize("short, full", [(0, 2000), (30, 2030), (31, 1931), (99, 1999)])
    def test_expand_year(short: int, full: int) -> None:
        """Years above the pivot belong to the 1900s."""
        assert EngineSettings().expand_year(short) == full

    @staticmethod
    def test_custom_pivot() -> None:
        """The pivot is configurable."""
        assert EngineSettings(year_pivot=50).expand_year(45) == 2045


class TestEnvironment:
    """Tests for the environment readers."""

    @staticmethod
    def test_unset(monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset or empty variables give the defaults."""
        monkeypatch.setenv(config.COUNTRY_ENV, "")
        assert config.load_settings() == EngineSettings()

    @staticmethod
    def test_all_set(monkeypatch: pytest.MonkeyPatch) -> None:
        """Values are parsed case-insensitively."""
        monkeypatch.setenv(config.COUNTRY_ENV, " France ")
        monkeypatch.setenv(config.WEEK_START_ENV, "Monday")
        monkeypatch.setenv(config.YEAR_PIVOT_ENV, "69")
        assert config.load_settings() == EngineSettings(
            country=Country.FRANCE, week_start=WeekFlags.MONDAY_FIRST, year_pivot=69
        )

    @staticmethod
    def test_bad_country(monkeypatch: pytest.MonkeyPatch) -> None:
        """Unknown countries are reported with the accepted names."""
        monkeypatch.setenv(config.COUNTRY_ENV, "atlantis")
        with pytest.raises(InvalidCountryError, match="ALMANAC_COUNTRY") as excinfo:
            config.get_country()
        assert excinfo.value.value == "atlantis"
        assert "USA" in str(excinfo.value)

    @staticmethod
    def test_bad_week_start(monkeypatch: pytest.MonkeyPatch) -> None:
        """Only sunday, monday and default are accepted."""
        monkeypatch.setenv(config.WEEK_START_ENV, "friday")
        with pytest.raises(InvalidSettingError, match="sunday, monday or default"):
            config.get_week_start()

    @staticmethod
    @pytest.mark.parametrize("value", ["abc", "-1", "100"])
    def test_bad_pivot(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """The pivot must be an integer in 0..99."""
        monkeypatch.setenv(config.YEAR_PIVOT_ENV, value)
        with pytest.raises(InvalidSettingError) as excinfo:
            config.get_year_pivot()
        assert excinfo.value.name == config.YEAR_PIVOT_ENV
