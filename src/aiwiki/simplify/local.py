"""Offline, deterministic simplifier used as the last fallback."""

import re

from aiwiki.simplify.base import NOT_ENOUGH_INFO

MAX_SENTENCES = 5
MAX_SENTENCE_CHARS = 180
TRUNCATED_SENTENCE_CHARS = 170
ELLIPSIS = "…"

# Longer forms come first so "utilizes" is not caught by "utilize".
EASY_WORDS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(rf"\b(?:{pattern})\b", re.IGNORECASE), replacement)
    for pattern, replacement in [
        ("approximately", "about"),
        ("utilizes", "uses"),
        ("utilize", "use"),
        ("numerous", "many"),
        ("subsequently", "then"),
        ("however", "but"),
        ("therefore|thus", "so"),
        ("individuals", "people"),
        ("objective", "goal"),
        ("complex", "hard"),
        ("significant", "big"),
        ("initiated", "started"),
        ("terminate", "end"),
    ]
]

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
_BREAKS = re.compile(r"[;—–]")
_WHITESPACE = re.compile(r"\s+")
_REPEATED_PERIODS = re.compile(r"\.{2,}")


def simplify_locally(text: str) -> str:
    """Make ``text`` easier to read without any network access.

    Drops parenthetical asides, turns semicolons and dashes into sentence
    breaks, swaps hard words for easy ones, shortens long sentences and
    keeps the first few.

    Returns:
        Simplified text ending in a single terminal mark, or
        :data:`NOT_ENOUGH_INFO` when nothing readable is left.
    """
    out = _PARENTHETICAL.sub("", text)
    out = _BREAKS.sub(".", out)
    out = _WHITESPACE.sub(" ", out).strip()
    for pattern, replacement in EASY_WORDS:
        out = pattern.sub(replacement, out)

    sentences: list[str] = []
    for part in out.split("."):
        sentence = part.strip()
        if not sentence:
            continue
        if len(sentence) > MAX_SENTENCE_CHARS:
            sentence = sentence[:TRUNCATED_SENTENCE_CHARS].strip() + ELLIPSIS
        sentences.append(sentence)
        if len(sentences) == MAX_SENTENCES:
            break

    if not sentences:
        return NOT_ENOUGH_INFO

    joined = " ".join(s if s.endswith(ELLIPSIS) else f"{s}." for s in sentences)
    return _REPEATED_PERIODS.sub(".", joined)
