"""Extractive summarization of turns being evicted from context."""

import logging

from .patterns import PROJECT_MENTION, iter_patterns
from .turn import Turn

logger = logging.getLogger(__name__)

MAX_KEY_POINTS = 10
PROJECT_CHARS = 50
QUESTION_CHARS = 100


def generate_summary(turns: list[Turn]) -> str:
    """Build a short digest of key facts from the given turns.

    Picks up names, employers, project mentions and questions asked by the
    user. Falls back to a message count when nothing was extracted.

    Args:
        turns: Turns to digest, oldest first.

    Returns:
        Summary text ending with a period.
    """
    key_points: list[str] = []

    for turn in turns:
        content = turn.content or ""

        for pattern in iter_patterns("self_intro"):
            match = pattern.search(content)
            if match:
                key_points.append(f"User's name: {match.group(1)}")
                break

        for pattern in iter_patterns("employer"):
            match = pattern.search(content)
            if match:
                key_points.append(f"Works at: {match.group(match.lastindex)}")
                break

        project = PROJECT_MENTION.search(content)
        if project:
            key_points.append(f"Project: {project.group(1)[:PROJECT_CHARS]}")

        if turn.role == "user" and turn.metadata and turn.metadata.is_question:
            key_points.append(f"Asked about: {content[:QUESTION_CHARS]}")

    unique = list(dict.fromkeys(key_points))[:MAX_KEY_POINTS]
    logger.debug(f"Summarized {len(turns)} turns into {len(unique)} key points")

    if not unique:
        return f"{len(turns)} previous messages exchanged."

    return ". ".join(unique) + "."
