"""Domain helpers for email format validation."""
from __future__ import annotations

import re

# Whitespace as ECMAScript's \s defines it. Python's \s differs: it also
# matches \x1c-\x1f and \x85, and it does not match \ufeff.
JS_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000-\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

# local-part@domain.tld, no whitespace or "@" inside any segment
_SEGMENT = f"[^{JS_WHITESPACE}@]+"
EMAIL_PATTERN = re.compile(f"{_SEGMENT}@{_SEGMENT}\\.{_SEGMENT}")


def is_valid_email(value: str | None) -> bool:
    """Return True when value looks like local-part@domain.tld."""
    if not value:
        return False
    return bool(EMAIL_PATTERN.fullmatch(value))
