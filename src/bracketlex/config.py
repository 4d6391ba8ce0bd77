"""Configuration for Localizer.

Provides a single frozen dataclass holding the service options, plus the
translation from a JavaScript-style option mapping (``loadTimeout`` in
milliseconds, camelCase keys) used by :meth:`Localizer.from_options`.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from bracketlex.constants import (
    DEFAULT_DOMAIN,
    DEFAULT_FALLBACK_LANGUAGES,
    DEFAULT_LOAD_TIMEOUT,
)
from bracketlex.diagnostics import ConfigurationError, ErrorTemplate

__all__ = ["LocalizerConfig"]

# Option key → (field name, divisor converting to seconds)
_OPTION_FIELDS: dict[str, tuple[str, int]] = {
    "loadTimeout": ("load_timeout", 1000),
    "load_timeout": ("load_timeout", 1),
}
_OPTION_ALIASES: dict[str, str] = {
    "baseUrl": "base_url",
    "base_url": "base_url",
    "fallbackLanguages": "fallback_languages",
    "fallback_languages": "fallback_languages",
    "defaultDomain": "default_domain",
    "default_domain": "default_domain",
}


@dataclass(frozen=True, slots=True)
class LocalizerConfig:
    """Immutable configuration for Localizer.

    All fields have defaults; ``LocalizerConfig()`` is a usable configuration.

    Attributes:
        load_timeout: Seconds before an unfinished load fails (default: 20).
        base_url: Location prefix handed to the resource loader (default: "").
        fallback_languages: Tags tried, in order, when nothing in a request
            matches (default: ("*", "i-default", "en", "en-US")).
        default_domain: Domain used when a translate call names none
            (default: "*").

    Example:
        >>> config = LocalizerConfig(load_timeout=5.0, base_url="locales/")
        >>> LocalizerConfig.from_options({"loadTimeout": 5000}).load_timeout
        5.0
    """

    load_timeout: float = DEFAULT_LOAD_TIMEOUT
    base_url: str = ""
    fallback_languages: tuple[str, ...] = DEFAULT_FALLBACK_LANGUAGES
    default_domain: str = DEFAULT_DOMAIN

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ConfigurationError: If a value has the wrong type or range
        """
        timeout = self.load_timeout
        if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
            raise ConfigurationError(
                ErrorTemplate.invalid_option("load_timeout", timeout, "positive number of seconds")
            )
        if not isinstance(self.base_url, str):
            raise ConfigurationError(
                ErrorTemplate.invalid_option("base_url", self.base_url, "str")
            )
        fallbacks = self.fallback_languages
        if isinstance(fallbacks, str) or not isinstance(fallbacks, Iterable):
            raise ConfigurationError(
                ErrorTemplate.invalid_option("fallback_languages", fallbacks, "sequence of tags")
            )
        fallbacks = tuple(fallbacks)
        if not all(isinstance(tag, str) and tag for tag in fallbacks):
            raise ConfigurationError(
                ErrorTemplate.invalid_option(
                    "fallback_languages", fallbacks, "every tag must be a non-empty str"
                )
            )
        # Lists are accepted and stored as tuples
        object.__setattr__(self, "fallback_languages", fallbacks)
        if not isinstance(self.default_domain, str) or not self.default_domain:
            raise ConfigurationError(
                ErrorTemplate.invalid_option("default_domain", self.default_domain, "non-empty str")
            )

    @classmethod
    def from_options(cls, options: Mapping[str, object]) -> LocalizerConfig:
        """Build a configuration from an option mapping.

        Accepts ``loadTimeout`` (milliseconds), ``baseUrl``,
        ``fallbackLanguages`` and ``defaultDomain``, and their snake_case
        spellings (``load_timeout`` is in seconds).

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        fields: dict[str, object] = {}
        for key, value in options.items():
            if key in _OPTION_FIELDS:
                name, divisor = _OPTION_FIELDS[key]
                if isinstance(value, bool) or not isinstance(value, int | float):
                    raise ConfigurationError(
                        ErrorTemplate.invalid_option(key, value, "number")
                    )
                fields[name] = value / divisor
            elif key in _OPTION_ALIASES:
                fields[_OPTION_ALIASES[key]] = value
            else:
                raise ConfigurationError(ErrorTemplate.unknown_option(key))
        return cls(**fields)  # type: ignore[arg-type]
