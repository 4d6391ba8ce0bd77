"""Tests for LocalizerConfig."""

import dataclasses

import pytest

from bracketlex import ConfigurationError, LocalizerConfig
from bracketlex.constants import DEFAULT_FALLBACK_LANGUAGES
from bracketlex.diagnostics import DiagnosticCode


class TestDefaults:
    """Default configuration."""

    def test_defaults(self) -> None:
        """LocalizerConfig() is usable as is."""
        config = LocalizerConfig()
        assert config.load_timeout == 20.0
        assert config.base_url == ""
        assert config.fallback_languages == DEFAULT_FALLBACK_LANGUAGES
        assert config.default_domain == "*"

    def test_frozen(self) -> None:
        """Configurations cannot be changed."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            LocalizerConfig().base_url = "x"  # type: ignore[misc]

    def test_list_fallbacks_become_tuple(self) -> None:
        """Lists are stored as tuples."""
        assert LocalizerConfig(fallback_languages=["en"]).fallback_languages == ("en",)  # type: ignore[arg-type]


class TestValidation:
    """Rejected values."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"load_timeout": 0},
            {"load_timeout": -1.5},
            {"load_timeout": True},
            {"load_timeout": "20"},
            {"base_url": None},
            {"fallback_languages": "en"},
            {"fallback_languages": ["en", ""]},
            {"fallback_languages": [1]},
            {"default_domain": ""},
        ],
    )
    def test_invalid(self, kwargs: dict[str, object]) -> None:
        """Each invalid field raises ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            LocalizerConfig(**kwargs)  # type: ignore[arg-type]
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.INVALID_OPTION


class TestFromOptions:
    """Option mappings."""

    def test_camel_case(self) -> None:
        """camelCase keys; loadTimeout is in milliseconds."""
        config = LocalizerConfig.from_options(
            {
                "loadTimeout": 1500,
                "baseUrl": "/locales/",
                "fallbackLanguages": ["en", "en-US"],
                "defaultDomain": "app",
            }
        )
        assert config == LocalizerConfig(
            load_timeout=1.5,
            base_url="/locales/",
            fallback_languages=("en", "en-US"),
            default_domain="app",
        )

    def test_snake_case(self) -> None:
        """snake_case keys; load_timeout is in seconds."""
        config = LocalizerConfig.from_options({"load_timeout": 3, "base_url": "x/"})
        assert config.load_timeout == 3
        assert config.base_url == "x/"

    def test_empty(self) -> None:
        """An empty mapping gives the defaults."""
        assert LocalizerConfig.from_options({}) == LocalizerConfig()

    def test_unknown_key(self) -> None:
        """Unknown keys are reported by name."""
        with pytest.raises(ConfigurationError, match="Unknown option 'timeout'"):
            LocalizerConfig.from_options({"timeout": 5})

    def test_non_numeric_timeout(self) -> None:
        """Timeouts must be numbers."""
        with pytest.raises(ConfigurationError):
            LocalizerConfig.from_options({"loadTimeout": "5000"})
