"""Prompt builder for release-note translation requests."""

from typing import Optional


# Google Play Store limit for "What's new" text
ANDROID_CHAR_LIMIT = 500

ANDROID_LIMITATION_CLAUSE = (
    f"IMPORTANT: The translated text must not exceed {ANDROID_CHAR_LIMIT} characters "
    "(Google Play Store release notes limit). Please provide a concise translation."
)


def build_prompt(
    text: str,
    source_locale: str,
    target_locale: str,
    context: Optional[str] = None,
    android_limitations: bool = False
) -> str:
    """
    Build the instruction sent to a language model.

    Args:
        text: Release notes in the source locale
        source_locale: Source locale (e.g., "en-US"), passed through as-is
        target_locale: Target locale (e.g., "de-DE"), passed through as-is
        context: Optional domain hint (e.g., "Fitness tracking app").
            A blank context is ignored.
        android_limitations: Append the Play Store length clause

    Returns:
        Prompt string for the LLM
    """
    prompt_parts = [
        f"Translate the following text from {source_locale} to {target_locale}:",
        "",
        f'"{text}"',
    ]

    if context and context.strip():
        prompt_parts.append("")
        prompt_parts.append(f"Context: {context}")

    if android_limitations:
        prompt_parts.append("")
        prompt_parts.append(ANDROID_LIMITATION_CLAUSE)

    return "\n".join(prompt_parts)


def apply_android_limitations(prompt: str) -> str:
    """
    Append the Play Store length clause to a prompt.

    Args:
        prompt: Existing prompt (may be empty)

    Returns:
        Prompt with the limitation instruction appended
    """
    if not prompt:
        return ANDROID_LIMITATION_CLAUSE
    return f"{prompt}\n\n{ANDROID_LIMITATION_CLAUSE}"
