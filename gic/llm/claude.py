"""Claude (Anthropic) LLM Client"""

from gic.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, OAUTH_SYSTEM_PROMPT, validate_commit_message


class ClaudeClient(LLMClient):
    """Claude API client. Authenticates per request with an OAuth token or API key."""

    DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
    MAX_TOKENS = 2048
    TEMPERATURE = 0.4
    MAX_RETRIES = 2
    OAUTH_BETA = "oauth-2025-04-20"

    def __init__(self, model: str | None = None, max_tokens: int | None = None, bearer: bool = True):
        self.model = model or self.DEFAULT_MODEL
        self.max_tokens = max_tokens or self.MAX_TOKENS
        self.bearer = bearer

        try:
            import anthropic  # noqa: F401
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def _make_client(self, token: str):
        from anthropic import Anthropic

        if self.bearer:
            return Anthropic(
                auth_token=token,
                default_headers={"anthropic-beta": self.OAUTH_BETA},
            )
        return Anthropic(api_key=token)

    def _system_prompt(self):
        if self.bearer:
            return [
                {"type": "text", "text": OAUTH_SYSTEM_PROMPT},
                {"type": "text", "text": SYSTEM_PROMPT},
            ]
        return SYSTEM_PROMPT

    def ask(self, token: str, prompt: str) -> LLMResponse:
        from anthropic import APIConnectionError, APIStatusError, AuthenticationError, RateLimitError

        client = self._make_client(token)
        last_error = ""
        for attempt in range(self.MAX_RETRIES + 1):
            try:
                retry_prompt = prompt
                if attempt > 0:
                    retry_prompt = f"{prompt}\n\nIMPORTANT: Your previous response was invalid ({last_error}). Reply with the commit message only."

                response = client.messages.create(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    temperature=self.TEMPERATURE,
                    system=self._system_prompt(),
                    messages=[{"role": "user", "content": retry_prompt}]
                )

                content = "".join(
                    block.text for block in response.content if block.type == "text"
                ).strip()

                is_valid, error = validate_commit_message(content)
                if not is_valid:
                    last_error = error
                    if attempt < self.MAX_RETRIES:
                        continue
                    if not content:
                        break

                return LLMResponse(
                    content=content,
                    model=self.model,
                    tokens_used=response.usage.input_tokens + response.usage.output_tokens
                )

            except AuthenticationError:
                raise LLMError("Claude rejected the credentials. Run: gic --login")
            except RateLimitError:
                raise LLMError("Claude rate limit reached. Wait a moment and try again.")
            except APIConnectionError as e:
                raise LLMError(f"Could not reach Claude API: {e}")
            except APIStatusError as e:
                raise LLMError(f"Claude API error ({e.status_code}): {e.message}")

        raise LLMError(f"Failed after {self.MAX_RETRIES} retries: {last_error}")
