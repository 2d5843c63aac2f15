"""Prompt template for commit message generation."""

from gato.config import MessageLimits


PROMPT_TEMPLATE = """You write git commit messages for senior engineers.
Return ONLY plain text commit message.
Format strictly:
1) subject line (max {subject_max} chars, imperative, concise)
2) blank line
3) bullet list using "- " prefix
Constraints:
- Ultra low prose, technical facts only
- Mention behavior, interface/rules, tests/docs when changed
- No markdown fences, no explanations, no prefixes like "feat:"
- Keep bullet lines <= {line_max} chars
"""


def build_prompt(context_text: str, limits: MessageLimits = MessageLimits(), model_hint: str = "") -> str:
    """Build the full prompt sent to the model.

    Args:
        context_text: The rendered change context.
        limits: Message limits quoted in the instructions.
        model_hint: Optional model name mentioned to the model.

    Returns:
        The prompt text.
    """
    prompt = PROMPT_TEMPLATE.format(subject_max=limits.subject_max, line_max=limits.line_max)
    if model_hint:
        prompt += f"- Model hint: {model_hint}\n"
    return f"{prompt}\nCHANGE DATA:\n{context_text}"
