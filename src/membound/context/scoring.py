"""Importance scoring of conversation turns."""

from .patterns import any_match, iter_patterns
from .turn import Importance, Turn, TurnMetadata

LONG_CONTENT_CHARS = 500
SHORT_CONTENT_CHARS = 20

HIGH_SCORE = 5
MEDIUM_SCORE = 2
LOW_SCORE = 0


def score_importance(turn: Turn) -> Importance:
    """Classify how strongly a turn should be retained.

    System turns and turns carrying a must-remember marker are CRITICAL.
    Bare acknowledgments are DISPOSABLE. Everything else is scored
    additively from its metadata and content and mapped onto a tier.
    """
    if turn.role == "system":
        return Importance.CRITICAL

    content = turn.content or ""
    if any_match(iter_patterns("must_remember"), content):
        return Importance.CRITICAL

    if any_match(iter_patterns("acknowledgment"), content.strip()):
        return Importance.DISPOSABLE

    metadata = turn.metadata or TurnMetadata()
    score = 0

    if metadata.has_code:
        score += 3
    if metadata.has_numbers:
        score += 2
    if metadata.is_instruction:
        score += 3
    if any_match(iter_patterns("self_intro"), content):
        score += 4
    if any_match(iter_patterns("employer"), content):
        score += 3
    if any_match(iter_patterns("project"), content):
        score += 2
    if any_match(iter_patterns("deadline"), content):
        score += 2

    if metadata.is_question:
        score += 1
    if len(content) > LONG_CONTENT_CHARS:
        score += 1
    if len(content) < SHORT_CONTENT_CHARS:
        score -= 1

    return importance_for_score(score)


def importance_for_score(score: int) -> Importance:
    if score >= HIGH_SCORE:
        return Importance.HIGH
    if score >= MEDIUM_SCORE:
        return Importance.MEDIUM
    if score >= LOW_SCORE:
        return Importance.LOW
    return Importance.DISPOSABLE
