"""Unit tests for configuration loading."""

from datetime import UTC, datetime

import pytest

from cmddocs.config import ConfigError, DocsConfig, generation_date, load_config, source_date


class TestSourceDate:
    """Tests for SOURCE_DATE_EPOCH handling."""

    def test_unset_returns_none(self):
        assert source_date({}) is None

    def test_empty_returns_none(self):
        assert source_date({"SOURCE_DATE_EPOCH": ""}) is None

    def test_epoch_parsed_as_utc(self):
        assert source_date({"SOURCE_DATE_EPOCH": "1704067200"}) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_invalid_epoch(self):
        with pytest.raises(ConfigError, match="Invalid SOURCE_DATE_EPOCH: 'soon'"):
            source_date({"SOURCE_DATE_EPOCH": "soon"})

    def test_explicit_date_wins(self, fixed_date, monkeypatch):
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "1704067200")

        assert generation_date(fixed_date) == fixed_date

    def test_environment_before_now(self, monkeypatch):
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "0")

        assert generation_date() == datetime(1970, 1, 1, tzinfo=UTC)


class TestDocsConfig:
    """Tests for environment and override layering."""

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CMDDOCS_SECTION", "8")
        monkeypatch.setenv("CMDDOCS_MANUAL", "Admin Manual")
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "1704067200")

        config = DocsConfig.from_environment()

        assert config.section == "8"
        assert config.manual == "Admin Manual"
        assert config.source == ""
        assert config.date == datetime(2024, 1, 1, tzinfo=UTC)

    def test_merged_skips_empty_values(self):
        config = DocsConfig(section="8", manual="Admin Manual")

        merged = config.merged(section="5", manual=None, source="")

        assert merged == DocsConfig(section="5", manual="Admin Manual")
        assert config.section == "8"

    def test_merged_rejects_unknown_keys(self):
        with pytest.raises(ConfigError, match="Unknown configuration key: colour"):
            DocsConfig().merged(colour="red")


class TestLoadConfig:
    """Tests for TOML configuration files."""

    def test_top_level_keys(self, tmp_path):
        path = tmp_path / "cmddocs.toml"
        path.write_text('section = 5\nmanual = "File Formats"\n')

        config = load_config(path, base=DocsConfig(source="Acme"))

        assert config == DocsConfig(section="5", manual="File Formats", source="Acme")

    def test_pyproject_table(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "acme"\n\n[tool.cmddocs]\ntitle = "ACME"\n')

        config = load_config(path, base=DocsConfig())

        assert config.title == "ACME"

    def test_pyproject_without_table(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.black]\nline-length = 100\n')

        assert load_config(path, base=DocsConfig(section="1")) == DocsConfig(section="1")

    def test_pyproject_without_tool_table(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[build-system]\nrequires = ["setuptools"]\n\n[project]\nname = "acme"\n'
        )

        assert load_config(path, base=DocsConfig(section="1")) == DocsConfig(section="1")

    def test_dates(self, tmp_path):
        path = tmp_path / "cmddocs.toml"
        path.write_text("date = 2024-03-01\n")

        config = load_config(path, base=DocsConfig())

        assert config.date == datetime(2024, 3, 1, tzinfo=UTC)

    def test_naive_datetime_treated_as_utc(self, tmp_path):
        path = tmp_path / "cmddocs.toml"
        path.write_text("date = 2024-03-01T10:30:00\n")

        config = load_config(path, base=DocsConfig())

        assert config.date == datetime(2024, 3, 1, 10, 30, tzinfo=UTC)

    def test_date_must_be_a_date(self, tmp_path):
        path = tmp_path / "cmddocs.toml"
        path.write_text('date = "yesterday"\n')

        with pytest.raises(ConfigError, match="'date' must be a TOML date"):
            load_config(path, base=DocsConfig())

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("section = [\n")

        with pytest.raises(ConfigError, match="Failed to load config file"):
            load_config(path, base=DocsConfig())

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "cmddocs.toml"
        path.write_text('colour = "red"\n')

        with pytest.raises(ConfigError, match="Unknown configuration key"):
            load_config(path, base=DocsConfig())

    def test_defaults_to_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CMDDOCS_SOURCE", "Acme 2.0")
        path = tmp_path / "cmddocs.toml"
        path.write_text('section = "3"\n')

        config = load_config(path)

        assert config.source == "Acme 2.0"
        assert config.section == "3"
