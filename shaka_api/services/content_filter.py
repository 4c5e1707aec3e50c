# Kid-friendly message filter

import re

MAX_MESSAGE_LENGTH = 50
REPLACEMENT = "❤️"  # red heart emoji

BLOCKED_WORDS = (
    "stupid", "dumb", "hate", "shut up", "shutup", "idiot", "loser", "sucks",
    "damn", "hell", "crap", "poop", "fart", "butt", "pee", "gross", "ugly",
    "kill", "die", "dead", "hurt", "pain", "bad", "worst", "terrible", "awful",
)

_BLOCKED_PATTERNS = [
    re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE | re.ASCII) for word in BLOCKED_WORDS
]


def filter_message(text: str | None) -> str | None:
    """
    Replace every blocked word with a heart and cap the length.

    Words match case-insensitively on ASCII word boundaries, so "DUMB" is
    replaced but "dumbbell" is left alone. Truncation happens after
    substitution. None and "" are returned unchanged.
    """
    if not text:
        return text

    filtered = text
    for pattern in _BLOCKED_PATTERNS:
        filtered = pattern.sub(REPLACEMENT, filtered)

    return filtered[:MAX_MESSAGE_LENGTH]
