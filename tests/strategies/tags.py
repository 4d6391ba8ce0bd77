"""Hypothesis strategies for language tags and lexicon data.

Event-Emitting Strategies (HypoFuzz-Optimized):
- language_tags: Emits tag_subtags=N
- lexicon_data: Emits lexicon_domains=N

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

from .patterns import literal_texts

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

_LANGUAGES = ["en", "de", "fr", "lv", "ja", "pt", "zh"]
_REGIONS = ["US", "GB", "DE", "AT", "FR", "CA", "BR", "LV"]
_VARIANTS = ["oxendict", "1996", "valencia", "x-private"]


@st.composite
def language_tags(draw: DrawFn, max_subtags: int = 3) -> str:
    """BCP-47 style tags such as "en", "en-GB", "en-GB-oxendict".

    Events emitted:
    - tag_subtags=N
    """
    parts = [draw(st.sampled_from(_LANGUAGES))]
    if max_subtags > 1 and draw(st.booleans()):
        parts.append(draw(st.sampled_from(_REGIONS)))
        if max_subtags > 2 and draw(st.booleans()):
            parts.append(draw(st.sampled_from(_VARIANTS)))
    event(f"tag_subtags={len(parts)}")
    return "-".join(parts)


_KEYS = st.from_regex(r"[a-z][a-z0-9_.]{0,12}", fullmatch=True)
_DOMAINS = st.one_of(st.just("*"), st.from_regex(r"[a-z]{1,8}", fullmatch=True))


@st.composite
def lexicon_data(draw: DrawFn) -> dict[str, dict[str, str]]:
    """Lexicon data with literal-only patterns.

    Events emitted:
    - lexicon_domains=N
    """
    data = draw(
        st.dictionaries(
            _DOMAINS,
            st.dictionaries(_KEYS, literal_texts(max_size=20), max_size=6),
            min_size=1,
            max_size=3,
        )
    )
    event(f"lexicon_domains={len(data)}")
    return data
