from typing import Protocol

NOT_ENOUGH_INFO = "Not enough info to simplify."

DEFAULT_SYSTEM_PROMPT = f"""\
You are a careful simplifier. Rewrite the user's provided text for a 10-year-old.
CRITICAL:
- Do NOT add new facts.
- Do NOT invent numbers, dates, or names.
- Keep it short, simple, and factual.
- Use small, clear sentences. Keep the meaning.
- If the input is too short or unclear, say: "{NOT_ENOUGH_INFO}"\
"""

USER_PROMPT_PREFIX = "Simplify this for a 10-year-old. Keep facts only; do not add anything:\n\n"


class Rewriter(Protocol):
    """Interface for a remote text simplifier.

    Implementations raise on any failure (transport error, non-2xx status,
    unexpected payload); the simplifier chain decides what happens next.
    """

    async def rewrite(self, text: str) -> str: ...
