"""Tests for Lexicon and LexiconStore.

Tests verify:
- Lexicon construction, validation and copying of input data
- derive(): merge precedence and independence from the base
- Thread-safe compile-once under concurrent translate calls
- Store register/install/detach state transitions
"""

import threading

import pytest
from hypothesis import given

from bracketlex.enums import LoadState
from bracketlex.lexicon import Lexicon, LexiconStore, PendingLoad, validate_lexicon_data
from bracketlex.runtime import ExtensionRegistry, Formatter
from tests.strategies import lexicon_data


def _noop() -> None:
    return None


class TestValidation:
    """validate_lexicon_data shape checks."""

    def test_valid(self) -> None:
        """Nested str mappings pass."""
        validate_lexicon_data({"*": {"a": "A"}, "menu": {}})

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            {1: {"a": "A"}},
            {"*": "flat"},
            {"*": {"a": 1}},
            {"*": {2: "two"}},
        ],
    )
    def test_invalid(self, data: object) -> None:
        """Anything else raises TypeError."""
        with pytest.raises(TypeError):
            validate_lexicon_data(data)


class TestLexicon:
    """Lexicon lookups."""

    def test_from_data_copies(self) -> None:
        """Later changes to the source data are not seen."""
        data = {"*": {"a": "A"}}
        lexicon = Lexicon.from_data("en", data)
        data["*"]["b"] = "B"
        assert not lexicon.has("*", "b")

    def test_lookups(self) -> None:
        """entry, pattern, keys, domains and len."""
        lexicon = Lexicon.from_data("en", {"*": {"a": "A", "b": "B"}, "menu": {"c": "C"}})
        assert lexicon.entry("*", "a") == "A"
        assert lexicon.pattern("menu", "c") == "C"
        assert lexicon.entry("menu", "a") is None
        assert lexicon.keys("*") == ("a", "b")
        assert lexicon.keys("nowhere") == ()
        assert lexicon.domains() == ("*", "menu")
        assert len(lexicon) == 3
        assert repr(lexicon) == "Lexicon(tag='en', domains=['*', 'menu'])"

    def test_formatter_missing(self) -> None:
        """Missing entries give None."""
        lexicon = Lexicon.from_data("en", {"*": {"a": "A"}})
        assert lexicon.formatter("*", "zz", ExtensionRegistry()) is None
        assert lexicon.formatter("zz", "a", ExtensionRegistry()) is None

    def test_pattern_of_compiled_entry(self) -> None:
        """pattern() returns the source even after compilation."""
        lexicon = Lexicon.from_data("en", {"*": {"a": "Hi [_1]"}})
        lexicon.formatter("*", "a", ExtensionRegistry())
        assert lexicon.is_compiled("*", "a")
        assert lexicon.pattern("*", "a") == "Hi [_1]"

    def test_concurrent_first_use_compiles_once(self) -> None:
        """Racing threads all get the one memoized formatter."""
        lexicon = Lexicon.from_data("en", {"*": {"a": "[_1] [_2]"}})
        registry = ExtensionRegistry()
        results: list[Formatter | None] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            results.append(lexicon.formatter("*", "a", registry))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(results) == 8
        assert all(result is results[0] for result in results)

    @given(data=lexicon_data())
    def test_len_counts_entries(self, data: dict[str, dict[str, str]]) -> None:
        """len() is the number of entries across domains."""
        assert len(Lexicon.from_data("x", data)) == sum(len(v) for v in data.values())


class TestDerive:
    """Base inheritance."""

    def test_merge_precedence(self) -> None:
        """Derived keys win; base keys not overridden are inherited."""
        base = Lexicon.from_data("en", {"*": {"hello": "Hello", "bye": "Bye"}})
        derived = base.derive("en-GB", {"*": {"hello": "Hiya"}, "menu": {"open": "Open"}})
        assert derived.tag == "en-GB"
        assert derived.pattern("*", "hello") == "Hiya"
        assert derived.pattern("*", "bye") == "Bye"
        assert derived.pattern("menu", "open") == "Open"

    def test_base_unchanged(self) -> None:
        """Deriving never changes the base."""
        base = Lexicon.from_data("en", {"*": {"hello": "Hello"}})
        base.derive("en-GB", {"*": {"hello": "Hiya", "new": "New"}})
        assert base.pattern("*", "hello") == "Hello"
        assert not base.has("*", "new")

    def test_compiled_entries_not_shared(self) -> None:
        """Compiled base entries are copied back as patterns."""
        registry = ExtensionRegistry()
        base = Lexicon.from_data("en", {"*": {"hello": "Hello [_1]"}})
        base_formatter = base.formatter("*", "hello", registry)
        derived = base.derive("en-GB", {})
        assert not derived.is_compiled("*", "hello")
        assert derived.formatter("*", "hello", registry) is not base_formatter

    def test_derive_validates(self) -> None:
        """Malformed overlay data raises TypeError."""
        base = Lexicon.from_data("en", {})
        with pytest.raises(TypeError):
            base.derive("en-GB", {"*": {"a": 1}})  # type: ignore[dict-item]


class TestPendingLoad:
    """PendingLoad callback lists."""

    def test_add_without_error_callback(self) -> None:
        """None error callbacks are not stored."""
        pending = PendingLoad("en")
        pending.add(_noop, None)
        assert pending.on_success == [_noop]
        assert pending.on_error == []
        assert pending.unobserved

    def test_observed_while_every_waiter_handles_errors(self) -> None:
        """unobserved stays False until a waiter omits on_error."""
        pending = PendingLoad("en")
        pending.add(_noop, _noop)
        assert not pending.unobserved
        pending.add(_noop, None)
        pending.add(_noop, _noop)
        assert pending.unobserved

    def test_cancel_timer_without_timer(self) -> None:
        """cancel_timer is safe before a timer is attached."""
        PendingLoad("en").cancel_timer()


class TestLexiconStore:
    """Atomic state transitions."""

    def test_register_creates_then_joins(self) -> None:
        """First caller creates, later callers join the same load."""
        store = LexiconStore()
        state, pending = store.register("en", _noop, None)
        assert state is LoadState.CREATED
        assert store.is_pending("en")
        joined_state, joined = store.register("en", _noop, None)
        assert joined_state is LoadState.JOINED
        assert joined is pending
        assert pending is not None
        assert len(pending.on_success) == 2

    def test_register_loaded(self) -> None:
        """Installed tags report LOADED and store no callbacks."""
        store = LexiconStore()
        store.install(Lexicon.from_data("en", {}))
        assert store.register("en", _noop, None) == (LoadState.LOADED, None)
        assert not store.is_pending("en")

    def test_install_detaches_pending(self) -> None:
        """install() returns the pending load it satisfied."""
        store = LexiconStore()
        _, pending = store.register("en", _noop, None)
        lexicon = Lexicon.from_data("en", {})
        assert store.install(lexicon) is pending
        assert store.get("en") is lexicon
        assert "en" in store
        assert store.tags() == ("en",)
        assert not store.is_pending("en")

    def test_install_replaces(self) -> None:
        """Installing a tag again replaces the lexicon."""
        store = LexiconStore()
        store.install(Lexicon.from_data("en", {"*": {"a": "1"}}))
        replacement = Lexicon.from_data("en", {"*": {"a": "2"}})
        assert store.install(replacement) is None
        assert store.get("en") is replacement

    def test_install_if_pending_current(self) -> None:
        """The current load installs."""
        store = LexiconStore()
        _, pending = store.register("en", _noop, None)
        assert pending is not None
        assert store.install_if_pending(pending, Lexicon.from_data("en", {}))
        assert "en" in store

    def test_install_if_pending_stale(self) -> None:
        """A detached load does not install."""
        store = LexiconStore()
        _, pending = store.register("en", _noop, None)
        assert pending is not None
        assert store.detach(pending)
        assert not store.install_if_pending(pending, Lexicon.from_data("en", {}))
        assert "en" not in store

    def test_detach_only_once(self) -> None:
        """Only the first detach succeeds."""
        store = LexiconStore()
        _, pending = store.register("en", _noop, None)
        assert pending is not None
        assert store.detach(pending)
        assert not store.detach(pending)

    def test_new_load_after_detach(self) -> None:
        """A retry after a failed load creates a fresh load."""
        store = LexiconStore()
        _, first = store.register("en", _noop, None)
        assert first is not None
        store.detach(first)
        state, second = store.register("en", _noop, None)
        assert state is LoadState.CREATED
        assert second is not first
        assert not store.detach(first)

    def test_concurrent_register_creates_once(self) -> None:
        """Exactly one of many racing callers creates the load."""
        store = LexiconStore()
        states: list[LoadState] = []
        barrier = threading.Barrier(10)

        def worker() -> None:
            barrier.wait()
            state, _ = store.register("en", _noop, None)
            states.append(state)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert states.count(LoadState.CREATED) == 1
        assert states.count(LoadState.JOINED) == 9
