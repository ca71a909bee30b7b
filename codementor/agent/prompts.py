"""System prompt for coding-help conversations."""

SYSTEM_PROMPT_TEMPLATE = (
    "You are an expert {language} developer. "
    "Provide clear explanations and practical code examples. "
    "Format your responses with an explanation followed by a code example "
    "that demonstrates the concept."
)


def build_system_prompt(language: str) -> str:
    """Return the system prompt for *language*.

    The language name is inserted as given; callers only guarantee it is
    non-empty.
    """
    return SYSTEM_PROMPT_TEMPLATE.format(language=language)
