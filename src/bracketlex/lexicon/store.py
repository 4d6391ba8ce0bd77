"""Lexicons and the per-service lexicon store.

A :class:`Lexicon` maps domain → key → entry, where an entry is either the
raw pattern or, after first use, its compiled
:class:`~bracketlex.runtime.compiler.Formatter`. Compilation is one-way and
happens at most once per entry, guarded by a per-lexicon lock.

A :class:`LexiconStore` owns the tag → Lexicon map and the tag → PendingLoad
map. Both are guarded by one readers-writer lock so that "is it loaded?",
"is a load in flight?" and "install it" are each a single atomic step.
Store methods never run user callbacks; they return what the caller must
notify, and the caller notifies outside the lock.

Thread Safety:
    Lexicon: compile-on-first-use under an internal Lock.
    LexiconStore: all methods take the RWLock (lookups shared, changes exclusive).

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bracketlex.enums import LoadState
from bracketlex.runtime.compiler import Formatter, compile_pattern
from bracketlex.runtime.rwlock import RWLock
from bracketlex.syntax.parser import parse_pattern

if TYPE_CHECKING:
    from bracketlex.lexicon.types import (
        DomainName,
        ErrorCallback,
        LanguageTag,
        LexiconData,
        MessageKey,
        PatternSource,
        SuccessCallback,
    )
    from bracketlex.runtime.extensions import ExtensionRegistry

__all__ = ["Lexicon", "LexiconStore", "PendingLoad", "validate_lexicon_data"]

logger = logging.getLogger(__name__)


def validate_lexicon_data(data: object) -> None:
    """Check that data is a mapping of str domain → mapping of str key → str pattern.

    Raises:
        TypeError: On the first entry with the wrong shape
    """
    if not isinstance(data, Mapping):
        msg = f"Lexicon data must be a mapping of domains, got {type(data).__name__}"
        raise TypeError(msg)
    for domain, entries in data.items():
        if not isinstance(domain, str):
            msg = f"Domain name must be str, got {type(domain).__name__}"
            raise TypeError(msg)
        if not isinstance(entries, Mapping):
            msg = f"Domain '{domain}' must map keys to patterns, got {type(entries).__name__}"
            raise TypeError(msg)
        for key, pattern in entries.items():
            if not isinstance(key, str) or not isinstance(pattern, str):
                msg = (
                    f"Entry {key!r} in domain '{domain}' must be str → str, "
                    f"got {type(key).__name__} → {type(pattern).__name__}"
                )
                raise TypeError(msg)


class Lexicon:
    """Per-language dictionary of domains, keys and patterns.

    Entries compile lazily on first lookup through :meth:`formatter`. A
    lexicon is never changed after construction apart from that.

    Example:
        >>> lexicon = Lexicon.from_data("en", {"*": {"hello": "Hello [_1]"}})
        >>> lexicon.is_compiled("*", "hello")
        False
    """

    __slots__ = ("_domains", "_lock", "tag")

    def __init__(
        self,
        tag: LanguageTag,
        domains: dict[DomainName, dict[MessageKey, PatternSource | Formatter]] | None = None,
    ) -> None:
        self.tag = tag
        self._domains = domains if domains is not None else {}
        self._lock = threading.Lock()

    @classmethod
    def from_data(cls, tag: LanguageTag, data: LexiconData) -> Lexicon:
        """Build a lexicon from raw data (copied, so later changes to data are not seen).

        Raises:
            TypeError: If data does not have the domain → key → pattern shape
        """
        validate_lexicon_data(data)
        lexicon = cls(tag)
        lexicon._merge(data)
        return lexicon

    def derive(self, tag: LanguageTag, data: LexiconData) -> Lexicon:
        """Copy this lexicon under a new tag and merge data on top.

        The copy shares nothing mutable with this lexicon: compiled entries
        are copied back as their source pattern and compile again on use in
        the derived lexicon. Colliding keys take the value from data.

        Raises:
            TypeError: If data does not have the domain → key → pattern shape
        """
        validate_lexicon_data(data)
        with self._lock:
            domains = {
                domain: {
                    key: entry.pattern if isinstance(entry, Formatter) else entry
                    for key, entry in entries.items()
                }
                for domain, entries in self._domains.items()
            }
        derived = Lexicon(tag, domains)
        derived._merge(data)
        return derived

    def _merge(self, data: LexiconData) -> None:
        for domain, entries in data.items():
            self._domains.setdefault(domain, {}).update(entries)

    def formatter(
        self, domain: DomainName, key: MessageKey, extensions: ExtensionRegistry
    ) -> Formatter | None:
        """Compiled entry, compiling and memoizing it on first use.

        Returns:
            Formatter, or None if the domain or key does not exist

        Raises:
            TemplateSyntaxError: If the pattern is malformed (entry stays raw)
            UnknownExtensionError: If the pattern calls an unregistered extension
        """
        with self._lock:
            entries = self._domains.get(domain)
            if entries is None or key not in entries:
                return None
            entry = entries[key]
            if isinstance(entry, Formatter):
                return entry
            compiled = compile_pattern(parse_pattern(entry), extensions, pattern=entry)
            entries[key] = compiled
            return compiled

    def entry(self, domain: DomainName, key: MessageKey) -> PatternSource | Formatter | None:
        """Raw pattern or compiled formatter without compiling anything."""
        with self._lock:
            return self._domains.get(domain, {}).get(key)

    def pattern(self, domain: DomainName, key: MessageKey) -> PatternSource | None:
        """Source pattern of an entry, compiled or not."""
        entry = self.entry(domain, key)
        return entry.pattern if isinstance(entry, Formatter) else entry

    def has(self, domain: DomainName, key: MessageKey) -> bool:
        return self.entry(domain, key) is not None

    def is_compiled(self, domain: DomainName, key: MessageKey) -> bool:
        return isinstance(self.entry(domain, key), Formatter)

    def domains(self) -> tuple[DomainName, ...]:
        with self._lock:
            return tuple(self._domains)

    def keys(self, domain: DomainName) -> tuple[MessageKey, ...]:
        with self._lock:
            return tuple(self._domains.get(domain, ()))

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._domains.values())

    def __repr__(self) -> str:
        return f"Lexicon(tag={self.tag!r}, domains={list(self.domains())!r})"


@dataclass(slots=True, eq=False)
class PendingLoad:
    """In-flight load for one tag.

    Callback lists only grow while the load is registered in the store;
    once the store hands the load back (install, expire or fail) they are
    final and safe to iterate without the lock.

    unobserved is set once any waiter registers without on_error; a failure
    of such a load is raised rather than only reported.
    """

    tag: LanguageTag
    on_success: list[SuccessCallback] = field(default_factory=list)
    on_error: list[ErrorCallback] = field(default_factory=list)
    timer: threading.Timer | None = None
    unobserved: bool = False

    def add(self, on_success: SuccessCallback, on_error: ErrorCallback | None) -> None:
        self.on_success.append(on_success)
        if on_error is None:
            self.unobserved = True
        else:
            self.on_error.append(on_error)

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()


class LexiconStore:
    """Tag → Lexicon and tag → PendingLoad, guarded together.

    Owned by one Localizer; never shared through module state.
    """

    __slots__ = ("_lexicons", "_lock", "_pending")

    def __init__(self) -> None:
        self._lock = RWLock()
        self._lexicons: dict[LanguageTag, Lexicon] = {}
        self._pending: dict[LanguageTag, PendingLoad] = {}

    def get(self, tag: LanguageTag) -> Lexicon | None:
        with self._lock.read():
            return self._lexicons.get(tag)

    def __contains__(self, tag: object) -> bool:
        with self._lock.read():
            return tag in self._lexicons

    def tags(self) -> tuple[LanguageTag, ...]:
        with self._lock.read():
            return tuple(self._lexicons)

    def is_pending(self, tag: LanguageTag) -> bool:
        with self._lock.read():
            return tag in self._pending

    def register(
        self,
        tag: LanguageTag,
        on_success: SuccessCallback,
        on_error: ErrorCallback | None,
    ) -> tuple[LoadState, PendingLoad | None]:
        """Atomically check for the lexicon, join a pending load or create one.

        Returns:
            (LOADED, None) if installed (callbacks not stored),
            (JOINED, load) if queued on an existing load,
            (CREATED, load) if a new load was registered; the caller starts it.
        """
        with self._lock.write():
            if tag in self._lexicons:
                return LoadState.LOADED, None
            pending = self._pending.get(tag)
            state = LoadState.JOINED
            if pending is None:
                pending = PendingLoad(tag)
                self._pending[tag] = pending
                state = LoadState.CREATED
            pending.add(on_success, on_error)
            return state, pending

    def install(self, lexicon: Lexicon) -> PendingLoad | None:
        """Install (or replace) a lexicon and detach any pending load for its tag.

        Returns:
            The detached pending load, whose success callbacks the caller fires
        """
        with self._lock.write():
            self._lexicons[lexicon.tag] = lexicon
            return self._pending.pop(lexicon.tag, None)

    def install_if_pending(self, pending: PendingLoad, lexicon: Lexicon) -> bool:
        """Install only while pending is still the current load for its tag.

        Returns:
            False if the load was already resolved (timed out, failed or
            satisfied by an explicit definition); nothing is installed.
        """
        with self._lock.write():
            if self._pending.get(pending.tag) is not pending:
                return False
            del self._pending[pending.tag]
            self._lexicons[lexicon.tag] = lexicon
            return True

    def detach(self, pending: PendingLoad) -> bool:
        """Remove pending if it is still current.

        Returns:
            True if this call detached it (the caller fires its error callbacks)
        """
        with self._lock.write():
            if self._pending.get(pending.tag) is not pending:
                return False
            del self._pending[pending.tag]
            return True
