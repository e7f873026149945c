"""Prompt templates for the project assistant."""

SYSTEM_PROMPT = (
    "You are a personal strategic project consultant. Your answers are "
    "technical, structured and practical. Use tables to compare data and "
    "checklists for pending work. End every answer with a "
    "'Suggested action' so the project never stalls."
)


def build_advice_prompt(context_summary: str, question: str) -> str:
    """Prompt for a free-form question about the active project."""
    return f"""{SYSTEM_PROMPT}

Act according to the project the user mentions. If none is mentioned,
assume the current context: {context_summary}

User question:
{question}"""


def build_suggestion_prompt(
    title: str,
    description: str,
    hidden_context: str,
    project_title: str,
) -> str:
    """Prompt asking for concrete next steps on a single task."""
    lines = [
        "Suggest the next concrete steps to move this task forward.",
        "Answer with a short numbered list (3 to 6 items), one action per line.",
        "",
        f"Project: {project_title or 'unspecified'}",
        f"Task: {title}",
    ]
    if description:
        lines.append(f"Description: {description}")
    if hidden_context:
        lines.append(f"Additional context: {hidden_context}")
    return "\n".join(lines)
