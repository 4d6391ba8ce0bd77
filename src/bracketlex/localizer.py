"""Localization service: language resolution, loading and handles.

:class:`Localizer` owns one lexicon store and ties the pieces together:

    get_handle("de-AT")
        → resolve_language picks an available tag ("de")
        → the load coordinator makes sure "de" is present (loading if needed)
        → a TranslationHandle over the "de" lexicon completes the future

Key architectural decisions:
- All state (lexicons, pending loads, languages) belongs to the instance;
  two Localizers never see each other's lexicons
- Protocol-based ResourceLoader (dependency inversion); without a loader,
  lexicons arrive through define_lexicon
- Results are delivered through concurrent.futures.Future objects, with
  optional callbacks for callers that prefer them

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import Future
from typing import TYPE_CHECKING

from bracketlex.config import LocalizerConfig
from bracketlex.diagnostics import ConfigurationError, ErrorTemplate, NoLanguageFoundError
from bracketlex.lexicon.coordinator import LoadCoordinator
from bracketlex.lexicon.resolver import resolve_language
from bracketlex.lexicon.store import LexiconStore
from bracketlex.locale_utils import get_system_language
from bracketlex.runtime.extensions import ExtensionRegistry
from bracketlex.runtime.handle import TranslationHandle
from bracketlex.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from bracketlex.enums import LoadState
    from bracketlex.lexicon.loading import ResourceLoader
    from bracketlex.lexicon.store import Lexicon
    from bracketlex.lexicon.types import (
        ErrorCallback,
        LanguageTag,
        LexiconData,
        SuccessCallback,
    )
    from bracketlex.runtime.extensions import Extension

__all__ = ["HandleFactory", "Localizer"]

logger = logging.getLogger(__name__)

type HandleFactory = Callable[..., TranslationHandle]
"""Builds a handle: factory(lexicon, *, tag, extensions, default_domain)."""


def _running_future[T]() -> Future[T]:
    """Future that callers can wait on but not cancel."""
    future: Future[T] = Future()
    future.set_running_or_notify_cancel()
    return future


class Localizer:
    """Run-time string localization service.

    Args:
        languages: Tags that can be requested (loaded on demand)
        lexicons: Eager lexicons, tag → domain → key → pattern
        loader: Resource loader for tags not defined eagerly
        config: Service options (timeouts, fallback chain, default domain)
        extensions: Extra pattern functions, name → callable(context, *values)
        handle_factory: Handle class or factory; override to customize
            fail_with or add context methods

    Raises:
        ConfigurationError: If neither languages nor lexicons names a tag

    Example:
        >>> localizer = Localizer(lexicons={
        ...     "en": {"*": {"files": "[*,_1,_1 file,_1 files]"}},
        ... })
        >>> localizer.handle("en").translate("files", 2)
        '2 files'
    """

    __slots__ = (
        "_config",
        "_coordinator",
        "_extensions",
        "_handle_factory",
        "_languages",
        "_lock",
        "_store",
    )

    def __init__(
        self,
        *,
        languages: Iterable[LanguageTag] | None = None,
        lexicons: Mapping[LanguageTag, LexiconData] | None = None,
        loader: ResourceLoader | None = None,
        config: LocalizerConfig | None = None,
        extensions: Mapping[str, Extension] | None = None,
        handle_factory: HandleFactory = TranslationHandle,
    ) -> None:
        if isinstance(languages, str):
            raise ConfigurationError(
                ErrorTemplate.invalid_option("languages", languages, "sequence of tags, not str")
            )
        self._config = config if config is not None else LocalizerConfig()
        self._extensions = ExtensionRegistry.with_builtins(extensions)
        self._handle_factory = handle_factory
        self._lock = RWLock()
        # dict as an insertion-ordered set
        self._languages: dict[LanguageTag, None] = dict.fromkeys(languages or ())
        self._languages.update(dict.fromkeys(lexicons or {}))
        if not self._languages:
            raise ConfigurationError(ErrorTemplate.languages_required())

        self._store = LexiconStore()
        self._coordinator = LoadCoordinator(
            self._store,
            loader,
            timeout=self._config.load_timeout,
            base_url=self._config.base_url,
        )
        for tag, data in (lexicons or {}).items():
            self._coordinator.define(tag, data)

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, object],
        *,
        loader: ResourceLoader | None = None,
        extensions: Mapping[str, Extension] | None = None,
        handle_factory: HandleFactory = TranslationHandle,
    ) -> Localizer:
        """Build a Localizer from one option mapping.

        Recognized keys: ``languages``, ``lexicons`` and every key accepted by
        :meth:`LocalizerConfig.from_options` (``loadTimeout`` in milliseconds).

        Example:
            >>> Localizer.from_options({"languages": ["en", "de"], "loadTimeout": 5000})
            Localizer(languages=['en', 'de'], loaded=[])

        Raises:
            ConfigurationError: On unknown keys, invalid values or no languages
        """
        remaining = dict(options)
        languages = remaining.pop("languages", None)
        lexicons = remaining.pop("lexicons", None)
        return cls(
            languages=languages,  # type: ignore[arg-type]
            lexicons=lexicons,  # type: ignore[arg-type]
            loader=loader,
            config=LocalizerConfig.from_options(remaining),
            extensions=extensions,
            handle_factory=handle_factory,
        )

    @property
    def config(self) -> LocalizerConfig:
        return self._config

    @property
    def languages(self) -> tuple[LanguageTag, ...]:
        """Tags the resolver may pick, in declaration order."""
        with self._lock.read():
            return tuple(self._languages)

    @property
    def extensions(self) -> ExtensionRegistry:
        return self._extensions

    def has_lexicon(self, tag: LanguageTag) -> bool:
        """Check whether tag's lexicon is installed (not merely available)."""
        return tag in self._store

    def resolve_language(self, requested: str) -> LanguageTag:
        """Pick the available tag that best serves requested.

        Raises:
            NoLanguageFoundError: If no tag and no fallback is available
        """
        return resolve_language(requested, self.languages, self._config.fallback_languages)

    def register_extension(self, name: str, func: Extension) -> None:
        """Make func callable from patterns as ``[name,...]``.

        Entries compiled before registration keep the functions they were
        compiled with.
        """
        self._extensions.register(name, func)

    def ensure_loaded(
        self,
        tag: LanguageTag,
        on_success: SuccessCallback,
        on_error: ErrorCallback | None = None,
    ) -> LoadState:
        """Load tag's lexicon if needed, then call on_success().

        Without on_error a failed load is raised on the worker thread that
        detected it. See :meth:`LoadCoordinator.ensure_loaded`.
        """
        return self._coordinator.ensure_loaded(tag, on_success, on_error)

    def define_lexicon(
        self,
        tag: LanguageTag,
        data: LexiconData,
        *,
        base: LanguageTag | None = None,
    ) -> Future[Lexicon]:
        """Install a lexicon for tag, optionally inheriting from base.

        With base, the base lexicon is loaded first and copied; data is merged
        on top. Later changes to the base are not seen by the new lexicon.
        Redefining a tag replaces its installed lexicon instead of keeping
        the first one: store entries are not add-once. Handles created before
        the redefinition keep the lexicon they were built with; new handles
        get the replacement.

        Returns:
            Future completed with the installed Lexicon, or failed with
            LexiconLoadError if the base could not be loaded

        Raises:
            TypeError: If data does not have the domain → key → pattern shape
            ValueError: If base names tag itself
        """
        future: Future[Lexicon] = _running_future()

        def installed(lexicon: Lexicon) -> None:
            with self._lock.write():
                self._languages.setdefault(tag, None)
            future.set_result(lexicon)

        self._coordinator.define(
            tag, data, base=base, on_installed=installed, on_failed=future.set_exception
        )
        return future

    def get_handle(
        self,
        tag: LanguageTag | None = None,
        *,
        on_success: Callable[[TranslationHandle], object] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Future[TranslationHandle]:
        """Resolve a tag, load its lexicon and produce a handle.

        Args:
            tag: Requested tag or Accept-Language style list; None uses the
                system language
            on_success: Called with the handle once it is ready
            on_error: Called with NoLanguageFoundError, LexiconLoadError or
                LoadTimeoutError on failure

        Returns:
            Future completed with the TranslationHandle, or failed with the error

        Raises:
            BracketLexError: On failure when on_success is given without
                on_error (from the thread that observes the failure)
        """
        future: Future[TranslationHandle] = _running_future()
        requested = tag if tag is not None else get_system_language()

        def failed(error: BaseException) -> None:
            future.set_exception(error)
            if on_error is not None:
                on_error(error)
            elif on_success is not None:
                raise error

        try:
            resolved = self.resolve_language(requested)
        except NoLanguageFoundError as e:
            logger.warning("No language found for request '%s'", requested)
            failed(e)
            return future

        def loaded() -> None:
            lexicon = self._store.get(resolved)
            assert lexicon is not None  # noqa: S101 - installed before success fires
            handle = self._handle_factory(
                lexicon,
                tag=resolved,
                extensions=self._extensions,
                default_domain=self._config.default_domain,
            )
            future.set_result(handle)
            if on_success is not None:
                on_success(handle)

        logger.debug("Request '%s' resolved to '%s'", requested, resolved)
        self._coordinator.ensure_loaded(resolved, loaded, failed)
        return future

    def handle(
        self, tag: LanguageTag | None = None, *, timeout: float | None = None
    ) -> TranslationHandle:
        """Blocking get_handle.

        Raises:
            NoLanguageFoundError: If no tag is available for the request
            LexiconLoadError: If loading failed (LoadTimeoutError on timeout)
            TimeoutError: If timeout seconds pass before the load resolves
        """
        return self.get_handle(tag).result(timeout)

    def __repr__(self) -> str:
        return f"Localizer(languages={list(self.languages)!r}, loaded={list(self._store.tags())!r})"
