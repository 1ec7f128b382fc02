"""Pattern-based structural tagging of turn content."""

from .patterns import (
    CODE_PATTERNS,
    INLINE_QUESTION,
    NUMBER_PATTERNS,
    TRAILING_QUESTION,
    any_match,
    iter_patterns,
)
from .turn import TurnMetadata


def extract_metadata(content: str) -> TurnMetadata:
    """Tag content as code, numbers, question and/or instruction.

    Args:
        content: Raw turn text.

    Returns:
        TurnMetadata with the detected flags. Never fails.
    """
    content = content or ""
    return TurnMetadata(
        has_code=any_match(CODE_PATTERNS, content),
        has_numbers=any_match(NUMBER_PATTERNS, content),
        is_question=(
            bool(TRAILING_QUESTION.search(content))
            or bool(INLINE_QUESTION.search(content))
            or any_match(iter_patterns("question"), content)
        ),
        is_instruction=any_match(iter_patterns("instruction"), content),
    )
