"""Build the length-constrained instruction sent to the language model.

The system prompt sets the ceiling the enhancer enforces; the user content
asks for the exact target so the model aims at the number instead of merely
staying under it.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass

from tone_resizer.models.rewrite import RewriteRequest
from tone_resizer.utils.word_count import count_words

# Each exemplar agrees with count_words()
COUNTING_EXEMPLARS: list[tuple[str, int]] = [
    ("don't", 1),
    ("2024", 1),
    ("state-of-the-art", 1),
    ("AI", 1),
    ("a", 1),
    ("high school", 2),
    ("New York City", 3),
]

_NUMBER_WORDS = {1: "ONE", 2: "TWO", 3: "THREE"}

SYSTEM_TEMPLATE = textwrap.dedent("""\
    You are a writing assistant that rewrites text to a requested length and tone.

    CRITICAL INSTRUCTIONS:
    1. Your output MUST NOT exceed {target} words
    2. Being shorter than {target} words is acceptable if it maintains clarity
    3. Word counting rules:
    {exemplars}
    4. For emails, the "Subject:" line is NOT counted in the word limit
    5. Write in this tone: {tone}

    Your task: Rewrite the following {document_type} aiming for {target} words.

    Format your response as:
    {output_format}""")

USER_TEMPLATE = textwrap.dedent("""\
    CRITICAL WORD COUNT REQUIREMENT: {target} WORDS EXACTLY

    Current text ({current} words):
    {content}

    STRICT REQUIREMENTS:
    1. Your response MUST be EXACTLY {target} words
    2. Not {below} words
    3. Not {above} words
    4. EXACTLY {target} words

    Required action: {action} from {current} to {target} words

    FORMAT:
    - Plain text only
    - No markdown
    - No bullet points
    - No numbered lists
    - Natural paragraphs only

    Tone: {tone}

    REMEMBER: Count your words carefully. The output MUST be EXACTLY {target} words.""")

EMAIL_FORMAT = "Subject: [Your subject]\n\n[Your rewritten content]"
BODY_FORMAT = "[Your rewritten content]"


@dataclass(frozen=True)
class ModelInstruction:
    system: str
    user: str


def length_action(current_words: int, target_words: int) -> str:
    """``"expand"`` when the target exceeds the current count, else ``"shorten"``."""
    return "expand" if target_words > current_words else "shorten"


def _format_exemplars() -> str:
    return "\n".join(
        f'   - "{phrase}" = {_NUMBER_WORDS[words]} word{"s" if words > 1 else ""}'
        for phrase, words in COUNTING_EXEMPLARS
    )


class RewritePromptBuilder:
    """Turn a :class:`RewriteRequest` into system and user prompts."""

    def build(self, request: RewriteRequest) -> ModelInstruction:
        target = request.target_words
        current = count_words(request.content)
        document_type = request.document_type.value

        system = SYSTEM_TEMPLATE.format(
            target=target,
            exemplars=_format_exemplars(),
            tone=request.tone,
            document_type=document_type,
            output_format=EMAIL_FORMAT if request.is_email else BODY_FORMAT,
        )
        user = USER_TEMPLATE.format(
            target=target,
            current=current,
            content=request.content.strip(),
            below=target - 1,
            above=target + 1,
            action=length_action(current, target).upper(),
            tone=request.tone,
        )
        return ModelInstruction(system=system, user=user)
