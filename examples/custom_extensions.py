"""Custom Extensions Example - Demonstrating Localizer.register_extension().

This example shows how to extend bracketlex with functions callable from
patterns as [name,arg,...]:

1. Simple text transformation (UPPER)
2. File size formatting with Babel
3. Locale-aware extension reading the handle's Babel locale
4. Custom handle subclass adding context for extensions
5. Custom fail_with for strict missing-key reporting

Every extension receives the calling TranslationHandle first, then the
argument values in pattern order.

Python 3.13+.
"""

from __future__ import annotations

from babel.dates import format_timedelta
from babel.numbers import format_decimal

from bracketlex import Localizer, TranslationHandle


# Example 1: Text transformation
def upper(context: TranslationHandle, text: object) -> str:  # noqa: ARG001
    """Uppercase the argument."""
    return str(text).upper()


# Example 2: File size with locale-aware digits
def filesize(context: TranslationHandle, size: object) -> str:
    """Format a byte count as B, KB, MB or GB."""
    value = float(str(size))
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            number = format_decimal(value, format="#,##0.#", locale=context.babel_locale)
            return f"{number} {unit}"
        value /= 1024
    return str(size)


# Example 3: Durations in the handle's language
def duration(context: TranslationHandle, seconds: object) -> str:
    """Human-readable duration such as '3 hours' or '3 Stunden'."""
    return format_timedelta(float(str(seconds)), locale=context.babel_locale)


print("=" * 50)
print("Registering extensions")
print("=" * 50)

localizer = Localizer(
    lexicons={
        "en": {"*": {
            "shout": "[upper,_1]!",
            "download": "Downloaded [filesize,_1] in [duration,_2].",
        }},
        "de": {"*": {
            "download": "[filesize,_1] in [duration,_2] heruntergeladen.",
        }},
    },
    extensions={"upper": upper, "filesize": filesize},
)
localizer.register_extension("duration", duration)

print(localizer.handle("en").translate("shout", "hello"))
# Output: HELLO!

for tag in ("en", "de"):
    print(localizer.handle(tag).translate("download", 5_368_709, 10_800))
# Output: Downloaded 5.1 MB in 3 hours.
#         5,1 MB in 3 Stunden heruntergeladen.


# Example 4: Handle subclass providing extra context
class AppHandle(TranslationHandle):
    """Handle exposing the application name to extensions."""

    app_name = "Notes"


def app(context: AppHandle) -> str:
    """Name of the running application."""
    return context.app_name


localizer = Localizer(
    lexicons={"en": {"*": {"about": "About [app]"}}},
    extensions={"app": app},
    handle_factory=AppHandle,
)
print(localizer.handle("en").translate("about"))
# Output: About Notes


# Example 5: Strict missing keys
class StrictHandle(TranslationHandle):
    """Raise instead of rendering a placeholder."""

    def fail_with(self, key: str, *args: object) -> str:
        msg = f"Missing translation for '{key}' in '{self.tag}'"
        raise KeyError(msg)


localizer = Localizer(lexicons={"en": {"*": {}}}, handle_factory=StrictHandle)
try:
    localizer.handle("en").translate("nope")
except KeyError as e:
    print(f"[STRICT] {e}")
# Output: [STRICT] "Missing translation for 'nope' in 'en'"

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
