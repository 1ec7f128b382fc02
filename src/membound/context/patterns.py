"""Per-locale pattern tables used by metadata extraction, scoring and summaries.

Adding a language means adding a LocalePatterns entry to LOCALES; the
extractor, scorer and summarizer iterate every registered locale.
"""

import re
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class LocalePatterns:
    """Compiled patterns for one language."""

    question: tuple[re.Pattern[str], ...] = ()
    instruction: tuple[re.Pattern[str], ...] = ()
    must_remember: tuple[re.Pattern[str], ...] = ()
    acknowledgment: tuple[re.Pattern[str], ...] = ()
    # First group captures the name
    self_intro: tuple[re.Pattern[str], ...] = ()
    # Last group captures the employer
    employer: tuple[re.Pattern[str], ...] = ()
    project: tuple[re.Pattern[str], ...] = ()
    deadline: tuple[re.Pattern[str], ...] = ()


# Locale-neutral structure detection
CODE_PATTERNS = (
    re.compile(r"```"),
    re.compile(r"`[^`]+`"),
    re.compile(r"\b(?:function|const|let|var|import|class|def)\s"),
)

NUMBER_PATTERNS = (
    re.compile(r"\d{4,}"),  # years, ids, large amounts
    re.compile(r"[$₹€£]\d+"),
    re.compile(r"\d+%"),
)

TRAILING_QUESTION = re.compile(r"\?\s*$")
INLINE_QUESTION = re.compile(r"\?[\"\s]")


ENGLISH = LocalePatterns(
    question=(
        re.compile(
            r"^\s*(?:what|why|how|when|where|who|whom|whose|which|can|could|"
            r"would|should|is|are|do|does|did|will)\b",
            re.IGNORECASE,
        ),
    ),
    instruction=(
        re.compile(r"\bplease\s", re.IGNORECASE),
        re.compile(r"\bdo this\b", re.IGNORECASE),
        re.compile(r"\bmake sure\b", re.IGNORECASE),
    ),
    must_remember=(
        re.compile(r"remember this", re.IGNORECASE),
        re.compile(r"important:", re.IGNORECASE),
        re.compile(r"don'?t forget", re.IGNORECASE),
    ),
    acknowledgment=(
        re.compile(r"^(?:ok|okay|thanks|thx|got it|understood|hmm)$", re.IGNORECASE),
    ),
    self_intro=(re.compile(r"my name is (\w+)", re.IGNORECASE),),
    employer=(re.compile(r"i work (at|for) ([^.]+)", re.IGNORECASE),),
    project=(re.compile(r"project", re.IGNORECASE),),
    deadline=(re.compile(r"deadline", re.IGNORECASE),),
)

# Romanized Hindi (Hinglish)
HINDI_LATIN = LocalePatterns(
    question=(
        re.compile(r"\b(?:kya|kaun|kahan|kab|kaise|kitna)\s", re.IGNORECASE),
    ),
    instruction=(
        re.compile(r"\b(?:karo|batao|likho|banao)\s", re.IGNORECASE),
    ),
    must_remember=(
        re.compile(r"yaad rakhna", re.IGNORECASE),
        re.compile(r"zaruri hai", re.IGNORECASE),
    ),
    acknowledgment=(
        re.compile(r"^(?:haan|theek hai)$", re.IGNORECASE),
    ),
    self_intro=(re.compile(r"mera naam (\w+)", re.IGNORECASE),),
)

LOCALES: dict[str, LocalePatterns] = {
    "en": ENGLISH,
    "hi_latn": HINDI_LATIN,
}

# Summary extraction of a project mention
PROJECT_MENTION = re.compile(r"project[:\s]+([^.]+)", re.IGNORECASE)


def iter_patterns(kind: str) -> Iterator[re.Pattern[str]]:
    """All patterns of a given kind across registered locales."""
    for locale in LOCALES.values():
        yield from getattr(locale, kind)


def any_match(patterns, text: str) -> bool:
    return any(p.search(text) for p in patterns)
