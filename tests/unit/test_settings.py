"""Unit tests for parser settings loading."""

import pytest

from herald.contexts.parsing.normalizer import DEFAULT_FILLER_PREFIXES
from herald.contexts.parsing.settings import (
    DEFAULT_MATCH_THRESHOLD,
    ParserSettings,
    load_parser_settings,
)


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv("HERALD_PARSER_CONFIG", raising=False)


@pytest.mark.unit
def test_defaults():
    """Test default settings without any config file."""
    settings = load_parser_settings()

    assert isinstance(settings, ParserSettings)
    assert settings.match_threshold == DEFAULT_MATCH_THRESHOLD
    assert settings.schedule_time == "09:00"
    assert settings.deadline_time == "17:00"
    assert settings.filler_prefixes == list(DEFAULT_FILLER_PREFIXES)


@pytest.mark.unit
def test_yaml_overrides_defaults(tmp_path):
    """Test that YAML values are merged onto the defaults."""
    config = tmp_path / "parser.yaml"
    config.write_text('match_threshold: 0.25\nschedule_time: "08:30"\nfiller_prefixes:\n  - hey\n')

    settings = load_parser_settings(config)

    assert settings.match_threshold == 0.25
    assert settings.schedule_time == "08:30"
    assert settings.deadline_time == "17:00"
    assert settings.filler_prefixes == ["hey"]


@pytest.mark.unit
def test_config_path_from_environment(tmp_path, monkeypatch):
    """Test that HERALD_PARSER_CONFIG points at the YAML file."""
    config = tmp_path / "parser.yaml"
    config.write_text("min_fragment_length: 3\n")
    monkeypatch.setenv("HERALD_PARSER_CONFIG", str(config))

    assert load_parser_settings().min_fragment_length == 3


@pytest.mark.unit
def test_missing_config_file(tmp_path):
    """Test error for a config path that does not exist."""
    with pytest.raises(FileNotFoundError):
        load_parser_settings(tmp_path / "missing.yaml")


@pytest.mark.unit
def test_out_of_range_threshold_in_yaml(tmp_path):
    """Test that merged values are validated."""
    config = tmp_path / "parser.yaml"
    config.write_text("match_threshold: 2.0\n")

    with pytest.raises(ValueError):
        load_parser_settings(config)


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"match_threshold": -0.1},
        {"min_fragment_length": 0},
        {"schedule_time": "25:00"},
        {"deadline_time": "five"},
    ],
)
def test_validate_rejects_bad_values(overrides):
    """Test that validate() catches malformed settings."""
    with pytest.raises(ValueError):
        ParserSettings(**overrides).validate()
