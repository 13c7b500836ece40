"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass


# Claude OAuth tokens are only accepted with this exact system prompt
OAUTH_SYSTEM_PROMPT = "You are Claude Code, Anthropic's official CLI for Claude."

SYSTEM_PROMPT = """You are a senior software engineer who writes precise, informative git commit messages.

Your standards:
- The diff shows WHAT; you explain WHY
- Match the tone and format of the repository's recent history
- Every word earns its place, no filler
- Reply with the commit message and nothing else"""

PREAMBLE_RE = re.compile(
    r"^(claude:|here'?s|here is|based on|i'll analyze|i will analyze|sure[,!])",
    re.IGNORECASE,
)


def validate_commit_message(content: str) -> tuple[bool, str]:
    """Check that a response looks like a bare commit message."""
    if not content or len(content.strip()) < 3:
        return False, "Response too short"

    first_line = content.strip().split('\n')[0]
    if PREAMBLE_RE.match(first_line):
        return False, f"Response starts with a preamble: {first_line[:50]}"

    return True, ""


def clean_commit_message(text: str) -> str:
    """Strip code fences and chatty lead-in lines from a model reply."""
    lines = [line for line in text.strip().split('\n') if not line.strip().startswith('```')]

    while lines and (not lines[0].strip() or PREAMBLE_RE.match(lines[0].strip())):
        if len(lines) == 1:
            break
        lines.pop(0)

    return '\n'.join(lines).strip()


@dataclass
class LLMResponse:
    """Structured response from the model."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def ask(self, token: str, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
