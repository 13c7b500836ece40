"""LLM Client Package"""

from gic.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, OAUTH_SYSTEM_PROMPT, validate_commit_message
from gic.llm.claude import ClaudeClient


def get_client(model: str | None = None, max_tokens: int | None = None, bearer: bool = True) -> LLMClient:
    """Get the Claude client configured for OAuth bearer tokens or API keys."""
    return ClaudeClient(model=model, max_tokens=max_tokens, bearer=bearer)


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "get_client",
    "SYSTEM_PROMPT",
    "OAUTH_SYSTEM_PROMPT",
    "validate_commit_message",
]
