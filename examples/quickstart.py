"""Quickstart example for bracketlex.

This example demonstrates basic usage of bracketlex for localization:
eager lexicons, parameters, pluralization, number formatting, domains,
language fallback, lexicon inheritance and loading lexicons from JSON files.

Note: Missing keys never raise. They render as "? key" and are logged at
WARNING; subclass TranslationHandle and override fail_with() to change that.
"""

import json
import tempfile
from decimal import Decimal
from pathlib import Path

from bracketlex import Localizer, LocalizerConfig, PathResourceLoader

# Example 1: Simple message
print("=" * 50)
print("Example 1: Simple Message")
print("=" * 50)

localizer = Localizer(lexicons={
    "en": {"*": {
        "hello": "Hello, World!",
        "welcome": "Welcome to bracketlex!",
    }},
})

handle = localizer.handle("en")
print(handle.translate("hello"))
# Output: Hello, World!

print(handle.translate("welcome"))
# Output: Welcome to bracketlex!

# Example 2: Parameters
print("\n" + "=" * 50)
print("Example 2: Parameters")
print("=" * 50)

localizer.define_lexicon("en", {"*": {
    "greeting": "Hello, [_1]!",
    "user-info": "[_1] [_2] (Age: [_3])",
    "last-word": "And finally: [_-1]",
}}).result()

handle = localizer.handle("en")
print(handle.translate("greeting", "Alice"))
# Output: Hello, Alice!

print(handle.translate("user-info", "Bob", "Smith", 30))
# Output: Bob Smith (Age: 30)

print(handle.translate("last-word", "a", "b", "c"))
# Output: And finally: c

# Example 3: Pluralization and numbers
print("\n" + "=" * 50)
print("Example 3: Pluralization and Numbers")
print("=" * 50)

localizer = Localizer(lexicons={
    "en": {"*": {
        "emails": "You have [*,_1,_1 email,_1 emails,no emails].",
        "balance": "Balance: [#,_1,#~,##0.00]",
        "literal": "Use ~[brackets~] and ~~tildes.",
    }},
    "de": {"*": {
        "emails": "Sie haben [*,_1,_1 E-Mail,_1 E-Mails,keine E-Mails].",
        "balance": "Kontostand: [#,_1,#~,##0.00]",
    }},
})

for tag in ("en", "de"):
    handle = localizer.handle(tag)
    for count in (0, 1, 5):
        print(f"[{tag}] {handle.translate('emails', count)}")
    print(f"[{tag}] {handle.translate('balance', Decimal('12345.6'))}")
# Output: [en] You have no emails. / 1 email / 5 emails
#         [en] Balance: 12,345.60
#         [de] Kontostand: 12.345,60

print(localizer.handle("en").translate("literal"))
# Output: Use [brackets] and ~tildes.

# Example 4: Domains and missing keys
print("\n" + "=" * 50)
print("Example 4: Domains and Missing Keys")
print("=" * 50)

localizer = Localizer(lexicons={
    "en": {
        "*": {"open": "Open"},
        "menu": {"open": "Open..."},
    },
})
handle = localizer.handle("en")
print(handle.translate("open"))
print(handle.translate("open", domain="menu"))
print(handle.translate("open", {"domain": "menu"}))
print(handle.translate("nonexistent.key"))
# Output: Open / Open... / Open... / ? nonexistent.key

# Example 5: Language fallback and inheritance
print("\n" + "=" * 50)
print("Example 5: Language Fallback and Inheritance")
print("=" * 50)

localizer = Localizer(lexicons={
    "en": {"*": {"color": "color", "hello": "Hello"}},
})
localizer.define_lexicon("en-GB", {"*": {"color": "colour"}}, base="en").result()

for requested in ("en-GB-oxendict", "en-US", "fr-FR"):
    handle = localizer.handle(requested)
    print(f"{requested} -> {handle.tag}: {handle.translate('color')}, {handle.translate('hello')}")
# Output: en-GB-oxendict -> en-GB: colour, Hello
#         en-US -> en: color, Hello
#         fr-FR -> en: color, Hello

# Example 6: Loading lexicons from JSON files
print("\n" + "=" * 50)
print("Example 6: Loading from Files")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmpdir:
    root = Path(tmpdir)
    (root / "en.json").write_text(
        json.dumps({"*": {"title": "Settings", "save": "Save"}}), encoding="utf-8"
    )
    (root / "lv.json").write_text(
        json.dumps({"lexicon": {"*": {"title": "Iestatījumi"}}, "base": "en"}),
        encoding="utf-8",
    )

    localizer = Localizer.from_options(
        {"languages": ["en", "lv"], "baseUrl": f"{root}/", "loadTimeout": 5000},
        loader=PathResourceLoader(),
    )

    # Futures and callbacks: both see the same handle
    future = localizer.get_handle(
        "lv-LV", on_success=lambda h: print(f"Loaded '{h.tag}' lexicon")
    )
    handle = future.result(timeout=5)
    print(handle.translate("title"))
    print(handle.translate("save"))
    # Output: Iestatījumi / Save

    print(localizer)
    # Output: Localizer(languages=['en', 'lv'], loaded=['en', 'lv'])

# Example 7: Configuration objects
print("\n" + "=" * 50)
print("Example 7: Configuration")
print("=" * 50)

config = LocalizerConfig(load_timeout=2.0, fallback_languages=("en",))
localizer = Localizer(lexicons={"en": {"*": {"hi": "Hi"}}}, config=config)
print(config)
print(localizer.handle("ja").translate("hi"))
# Output: Hi

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
