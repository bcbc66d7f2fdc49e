"""prompt_toolkit styles for the interactive table and index prompts."""

from __future__ import annotations

from prompt_toolkit.styles import Style

_MUTED = "ansibrightblack"

_BASE_RULES = {
    "checkbox": _MUTED,
    "separator": _MUTED,
    "instruction": _MUTED,
    "disabled": _MUTED,
    "error": "bold ansired",
}


def prompt_style(accent: str, *, question: str | None = None) -> Style:
    """
    Build a prompt style where answers and the cursor use `accent`.

    The question line uses `question` when given, otherwise `accent`.
    """
    emphasis = f"bold {accent}"
    return Style.from_dict(
        {
            **_BASE_RULES,
            "question": f"bold {question or accent}",
            "answer": emphasis,
            "pointer": emphasis,
            "highlighted": emphasis,
            "selected": emphasis,
            "checkbox-selected": emphasis,
        }
    )


# Picking tables to act on.
PICK_STYLE = prompt_style("ansibrightgreen", question="ansibrightcyan")
# Confirming a DROP or any other irreversible statement.
DESTRUCTIVE_STYLE = prompt_style("ansibrightred")
