"""
Prompt construction for pain point classification.
"""

from config import CLASSIFIER_SYSTEM_PROMPT


def build_messages(text: str) -> list[dict]:
    """
    Build the chat request for one description.

    The rubric lives entirely in the system message; the user message is the
    raw description and nothing else.
    """
    return [
        {"role": "system", "content": CLASSIFIER_SYSTEM_PROMPT},
        {"role": "user", "content": text},
    ]
