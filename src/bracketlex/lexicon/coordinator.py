"""Load coordination: one fetch per tag, fan-out to every waiter.

``ensure_loaded(tag, on_success, on_error)`` guarantees that the lexicon for
tag is (or becomes) present and that exactly one of the callbacks fires:

    lexicon present     → on_success() right away, on the caller's thread
    load in flight      → callbacks queue on it (no second fetch)
    nothing yet         → pending load registered, loader started on a
                          worker thread, timeout timer armed

A pending load resolves exactly once. Installation fires every queued
on_success in registration order; a timeout or loader failure fires every
queued on_error in order, and if any waiter gave no on_error the failure is
then raised on the timer or loader thread, where threading.excepthook sees
it. Whatever loses that race is dropped: a resource arriving after its
timeout is logged and discarded, never installed.

Callbacks run outside the store lock. A raising callback does not stop the
fan-out; the exceptions are raised together as an ExceptionGroup once every
callback has run. An unobserved failure is raised alone, or leads that group.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from bracketlex.constants import DEFAULT_LOAD_TIMEOUT
from bracketlex.diagnostics import ErrorTemplate, LexiconLoadError, LoadTimeoutError
from bracketlex.enums import LoadState
from bracketlex.lexicon.store import Lexicon, validate_lexicon_data

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from bracketlex.lexicon.loading import LexiconResource, ResourceLoader
    from bracketlex.lexicon.store import LexiconStore, PendingLoad
    from bracketlex.lexicon.types import ErrorCallback, LanguageTag, LexiconData, SuccessCallback

__all__ = ["LoadCoordinator"]

logger = logging.getLogger(__name__)


def _run_callbacks(
    callbacks: Iterable[Callable[..., object]],
    *args: object,
    unhandled: Exception | None = None,
) -> None:
    """Call every callback in order, then raise all their exceptions together.

    unhandled is raised after the callbacks even if none of them fails.
    """
    errors: list[Exception] = [] if unhandled is None else [unhandled]
    for callback in callbacks:
        try:
            callback(*args)
        except Exception as e:  # noqa: BLE001 - collected and re-raised below
            errors.append(e)
    if unhandled is not None and len(errors) == 1:
        raise unhandled
    if errors:
        msg = f"{len(errors)} lexicon load error(s) raised"
        raise ExceptionGroup(msg, errors)


class LoadCoordinator:
    """Deduplicated asynchronous lexicon loading over a LexiconStore.

    Args:
        store: Store owning lexicons and pending loads
        loader: Resource loader; None means lexicons only arrive through
            :meth:`define`, and loads without one wait for it or time out
        timeout: Seconds before a pending load fails with LoadTimeoutError
        base_url: Prefix passed to the loader
    """

    __slots__ = ("_base_url", "_loader", "_store", "_timeout")

    def __init__(
        self,
        store: LexiconStore,
        loader: ResourceLoader | None = None,
        *,
        timeout: float = DEFAULT_LOAD_TIMEOUT,
        base_url: str = "",
    ) -> None:
        self._store = store
        self._loader = loader
        self._timeout = timeout
        self._base_url = base_url

    def ensure_loaded(
        self,
        tag: LanguageTag,
        on_success: SuccessCallback,
        on_error: ErrorCallback | None = None,
    ) -> LoadState:
        """Make sure tag's lexicon is present, then call on_success().

        Args:
            tag: Language tag to load
            on_success: Called with no arguments once the lexicon is present
            on_error: Called with LexiconLoadError or LoadTimeoutError on failure;
                without it the failure is raised on the timer or loader thread

        Returns:
            How the request was handled (LOADED, JOINED or CREATED)

        Raises:
            TypeError: If on_success is not callable, or on_error is neither
                callable nor None
        """
        if not callable(on_success):
            msg = f"on_success must be callable, got {type(on_success).__name__}"
            raise TypeError(msg)
        if on_error is not None and not callable(on_error):
            msg = f"on_error must be callable or None, got {type(on_error).__name__}"
            raise TypeError(msg)

        state, pending = self._store.register(tag, on_success, on_error)
        match state:
            case LoadState.LOADED:
                on_success()
            case LoadState.JOINED:
                logger.debug("Joined in-flight load of lexicon '%s'", tag)
            case LoadState.CREATED:
                assert pending is not None  # noqa: S101 - register() contract
                self._start(pending)
        return state

    def define(
        self,
        tag: LanguageTag,
        data: LexiconData,
        *,
        base: LanguageTag | None = None,
        on_installed: Callable[[Lexicon], object] | None = None,
        on_failed: ErrorCallback | None = None,
    ) -> None:
        """Install a lexicon from data, optionally derived from a base lexicon.

        Without base the lexicon is installed synchronously. With base, the
        base is loaded first; if that fails, nothing is installed and
        on_failed receives a LexiconLoadError.

        Raises:
            TypeError: If data does not have the domain → key → pattern shape
            ValueError: If base names tag itself
        """
        if base is None:
            lexicon = Lexicon.from_data(tag, data)
            self.install(lexicon)
            if on_installed is not None:
                on_installed(lexicon)
            return

        # Fail on bad data now rather than after the base arrives.
        validate_lexicon_data(data)
        if base == tag:
            msg = f"Lexicon '{tag}' cannot be its own base"
            raise ValueError(msg)

        def base_loaded() -> None:
            lexicon = self._derive(tag, base, data)
            self.install(lexicon)
            if on_installed is not None:
                on_installed(lexicon)

        def base_failed(error: BaseException) -> None:
            failure = LexiconLoadError(ErrorTemplate.base_load_failed(tag, base), tag=tag)
            failure.__cause__ = error
            logger.error("Lexicon '%s' not defined: base '%s' failed to load: %s", tag, base, error)
            if on_failed is not None:
                on_failed(failure)

        self.ensure_loaded(base, base_loaded, base_failed)

    def install(self, lexicon: Lexicon) -> None:
        """Install a lexicon and resolve any pending load for its tag."""
        pending = self._store.install(lexicon)
        logger.info("Installed lexicon '%s' (%d entries)", lexicon.tag, len(lexicon))
        if pending is not None:
            pending.cancel_timer()
            self._notify_success(pending)

    def _derive(self, tag: LanguageTag, base: LanguageTag, data: LexiconData) -> Lexicon:
        base_lexicon = self._store.get(base)
        if base_lexicon is None:
            msg = f"Base lexicon '{base}' reported loaded but is not installed"
            raise LexiconLoadError(msg, tag=tag)
        return base_lexicon.derive(tag, data)

    def _start(self, pending: PendingLoad) -> None:
        tag = pending.tag
        timer = threading.Timer(self._timeout, self._expire, args=(pending,))
        timer.name = f"lexicon-timeout-{tag}"
        timer.daemon = True
        pending.timer = timer
        timer.start()
        if self._loader is None:
            logger.info("Waiting for lexicon '%s' to be defined (no loader)", tag)
            return
        logger.info("Loading lexicon '%s' from '%s'", tag, self._base_url)
        threading.Thread(
            target=self._run_loader,
            args=(pending,),
            name=f"lexicon-load-{tag}",
            daemon=True,
        ).start()

    def _run_loader(self, pending: PendingLoad) -> None:
        tag = pending.tag
        assert self._loader is not None  # noqa: S101 - only started with a loader
        try:
            resource = self._loader.load(tag, self._base_url)
        except Exception as e:  # noqa: BLE001 - any loader error fails the load
            self._fail(pending, LexiconLoadError(ErrorTemplate.load_failed(tag, e), tag=tag), e)
            return
        self._complete(pending, resource)

    def _complete(self, pending: PendingLoad, resource: LexiconResource) -> None:
        tag = pending.tag
        if resource.base is None:
            try:
                lexicon = Lexicon.from_data(tag, resource.data)
            except TypeError as e:
                self._fail(pending, LexiconLoadError(ErrorTemplate.load_failed(tag, e), tag=tag), e)
                return
            self._install_loaded(pending, lexicon)
            return

        base = resource.base
        if base == tag:
            msg = f"Lexicon '{tag}' names itself as base"
            self._fail(pending, LexiconLoadError(msg, tag=tag), ValueError(msg))
            return

        def base_loaded() -> None:
            try:
                lexicon = self._derive(tag, base, resource.data)
            except TypeError as e:
                self._fail(pending, LexiconLoadError(ErrorTemplate.load_failed(tag, e), tag=tag), e)
                return
            self._install_loaded(pending, lexicon)

        def base_failed(error: BaseException) -> None:
            logger.error("Lexicon '%s' failed: base '%s' failed to load: %s", tag, base, error)
            failure = LexiconLoadError(ErrorTemplate.base_load_failed(tag, base), tag=tag)
            self._fail(pending, failure, error)

        self.ensure_loaded(base, base_loaded, base_failed)

    def _install_loaded(self, pending: PendingLoad, lexicon: Lexicon) -> None:
        if not self._store.install_if_pending(pending, lexicon):
            logger.warning(
                "Dropping late lexicon '%s': its load was already resolved", pending.tag
            )
            return
        pending.cancel_timer()
        logger.info("Installed lexicon '%s' (%d entries)", lexicon.tag, len(lexicon))
        self._notify_success(pending)

    def _expire(self, pending: PendingLoad) -> None:
        if not self._store.detach(pending):
            return
        logger.warning("Loading lexicon '%s' timed out after %.3gs", pending.tag, self._timeout)
        error = LoadTimeoutError(
            ErrorTemplate.load_timeout(pending.tag, self._timeout), tag=pending.tag
        )
        self._notify_error(pending, error)

    def _fail(self, pending: PendingLoad, error: LexiconLoadError, cause: BaseException) -> None:
        error.__cause__ = cause
        if not self._store.detach(pending):
            logger.warning(
                "Ignoring failure of lexicon '%s': its load was already resolved: %s",
                pending.tag,
                cause,
            )
            return
        pending.cancel_timer()
        self._notify_error(pending, error)

    @staticmethod
    def _notify_success(pending: PendingLoad) -> None:
        logger.debug(
            "Lexicon '%s' ready; notifying %d waiter(s)", pending.tag, len(pending.on_success)
        )
        _run_callbacks(pending.on_success)

    @staticmethod
    def _notify_error(pending: PendingLoad, error: LexiconLoadError) -> None:
        logger.debug(
            "Lexicon '%s' failed; notifying %d waiter(s)", pending.tag, len(pending.on_error)
        )
        if not pending.unobserved:
            _run_callbacks(pending.on_error, error)
            return
        logger.error(
            "Lexicon '%s' failed and a waiter has no error handler: %s", pending.tag, error
        )
        _run_callbacks(pending.on_error, error, unhandled=error)
