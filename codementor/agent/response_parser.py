"""Split raw model output into an explanation and a code sample."""

import logging
import re

from ..models.messages import GenerationResult

logger = logging.getLogger(__name__)

FENCE = "```"

# A bare lowercase language tag on the fence line, e.g. "python\n".
_LANGUAGE_TAG = re.compile(r"^[a-z]+\n")


def split_explanation_and_code(raw: str) -> GenerationResult:
    """Split *raw* model output on the first fenced code block.

    The text before the first fence becomes the explanation. The body of the
    first fenced block, minus its language tag line, becomes the code. Any
    later blocks or trailing prose are dropped.

    Without a fence the whole (stripped) text is the explanation and code is
    empty.
    """
    parts = raw.split(FENCE)
    explanation = parts[0].strip()
    if len(parts) < 2:
        return GenerationResult(explanation=explanation, code="")

    if len(parts) > 3:
        logger.debug("Reply contains %d code blocks, keeping the first", (len(parts) - 1) // 2)
    code = _LANGUAGE_TAG.sub("", parts[1], count=1).strip()
    return GenerationResult(explanation=explanation, code=code)
