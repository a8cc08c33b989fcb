"""Unit tests for configuration loading."""

import logging
from pathlib import Path

import pytest
import structlog

from tooltip_taxonomy.config import Config
from tooltip_taxonomy.exceptions import ConfigurationError
from tooltip_taxonomy.logging_config import (
    bind_rendering_context,
    configure_logging,
    get_logger,
)


def test_defaults() -> None:
    """Test default settings."""
    config = Config.load(environ={})

    assert config.logging.level == "INFO"
    assert config.logging.json_logging is False
    assert config.tooltip.truncate_length == 100
    assert config.tooltip.allowed_tags == ["b", "i", "strong", "span", "br", "a", "em"]
    assert config.tooltip.cache_tag_prefix == "tooltip_taxonomy"


def test_load_from_toml(tmp_path: Path) -> None:
    """Test values read from a TOML file."""
    config_file = tmp_path / "tooltips.toml"
    config_file.write_text(
        '[logging]\nlevel = "DEBUG"\njson_logging = true\n\n'
        '[tooltip]\ntruncate_length = 80\nallowed_tags = ["b", "i"]\n',
        encoding="utf-8",
    )

    config = Config.load(config_file, environ={})

    assert config.logging.level == "DEBUG"
    assert config.logging.json_logging is True
    assert config.tooltip.truncate_length == 80
    assert config.tooltip.allowed_tags == ["b", "i"]


def test_environment_overrides_file(tmp_path: Path) -> None:
    """Test that environment variables win over the file."""
    config_file = tmp_path / "tooltips.toml"
    config_file.write_text('[tooltip]\nbase_url = "https://file.example"\n', encoding="utf-8")

    config = Config.load(
        environ={
            "TOOLTIP_TAXONOMY_CONFIG": str(config_file),
            "TOOLTIP_TAXONOMY_TOOLTIP__BASE_URL": "https://env.example",
            "TOOLTIP_TAXONOMY_TOOLTIP__ALLOWED_TAGS": "b, em",
            "TOOLTIP_TAXONOMY_LOGGING__JSON_LOGGING": "yes",
            "UNRELATED": "1",
        }
    )

    assert config.tooltip.base_url == "https://env.example"
    assert config.tooltip.allowed_tags == ["b", "em"]
    assert config.logging.json_logging is True


def test_unknown_option_is_rejected(tmp_path: Path) -> None:
    """Test that typos are reported."""
    config_file = tmp_path / "tooltips.toml"
    config_file.write_text("[tooltip]\ntruncate = 5\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Config.load(config_file, environ={})

    with pytest.raises(ConfigurationError):
        Config.load(environ={"TOOLTIP_TAXONOMY_CACHE__ENABLED": "1"})


def test_invalid_values_are_rejected() -> None:
    """Test values that cannot be coerced."""
    with pytest.raises(ConfigurationError):
        Config.load(environ={"TOOLTIP_TAXONOMY_TOOLTIP__TRUNCATE_LENGTH": "many"})

    with pytest.raises(ConfigurationError):
        Config.load(environ={"TOOLTIP_TAXONOMY_LOGGING__JSON_LOGGING": "maybe"})


def test_missing_config_file(tmp_path: Path) -> None:
    """Test an explicit path that does not exist."""
    with pytest.raises(ConfigurationError):
        Config.load(tmp_path / "absent.toml", environ={})


def test_invalid_toml(tmp_path: Path) -> None:
    """Test a file that is not TOML."""
    config_file = tmp_path / "broken.toml"
    config_file.write_text("[tooltip\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Config.load(config_file, environ={})


def test_configure_logging_with_file(tmp_path: Path) -> None:
    """Test that a log file handler is attached once and its folder created."""
    config = Config.load(environ={})
    config.logging.log_file = str(tmp_path / "logs" / "tooltips.log")
    root = logging.getLogger()

    try:
        configure_logging(config)
        configure_logging(config)

        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert (tmp_path / "logs").is_dir()
        assert len(file_handlers) == 1
        assert get_logger("tooltip_taxonomy.test") is not None
    finally:
        config.logging.log_file = None
        configure_logging(config)

    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)


def test_bind_rendering_context(make_context) -> None:
    """Test that field details are bound only inside the block."""
    context = make_context(text="a dog", path="/node/7", view_mode="teaser")

    with bind_rendering_context(context):
        bound = structlog.contextvars.get_contextvars()
        assert bound["path"] == "/node/7"
        assert bound["field"] == "node-body"
        assert bound["view_mode"] == "teaser"
        assert bound["text_format"] == "basic_html"

    assert "field" not in structlog.contextvars.get_contextvars()
