"""Yes/no detection for a pending assistance request.

``substring`` mode is the long-standing behavior: any occurrence of "yes"
or "no" counts, so "I don't know" is a decline and "eyesight" is a yes.
``word`` mode only matches the whole words, so "nope" is neither. In both
modes an affirmative wins over a negative ("no wait, yes" submits).
"""

import re
from typing import Literal

Answer = Literal["affirm", "decline"]
MatchMode = Literal["substring", "word"]

_WORDS = re.compile(r"[a-z]+")


def classify_confirmation(message: str, mode: MatchMode = "substring") -> Answer | None:
    text = message.lower()
    if mode == "word":
        words = set(_WORDS.findall(text))
        affirm, decline = "yes" in words, "no" in words
    else:
        affirm, decline = "yes" in text, "no" in text

    if affirm:
        return "affirm"
    if decline:
        return "decline"
    return None
