"""Text-generation client: OpenAI or Anthropic, selected by settings.ai_provider."""

from typing import Protocol

import anthropic
from openai import AsyncOpenAI, OpenAIError

from stayhub.config import Settings, settings
from stayhub.exceptions import ProviderUnavailableError
from stayhub.logging import get_logger

logger = get_logger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str, max_tokens: int = 200) -> str: ...


class LLMClient:
    """Async LLM client for a single configured provider.

    Every failure (no key configured, network error, API error, empty answer)
    surfaces as ProviderUnavailableError.
    """

    def __init__(self, config: Settings) -> None:
        self.provider = config.ai_provider
        self._temperature = config.ai_temperature
        self._openai_model = config.openai_model
        self._anthropic_model = config.anthropic_model
        self._openai: AsyncOpenAI | None = None
        self._anthropic: anthropic.AsyncAnthropic | None = None

        if self.provider == "openai" and config.openai_api_key:
            self._openai = AsyncOpenAI(api_key=config.openai_api_key)
        if self.provider == "anthropic" and config.anthropic_api_key:
            self._anthropic = anthropic.AsyncAnthropic(api_key=config.anthropic_api_key)

    async def generate(self, prompt: str, max_tokens: int = 200) -> str:
        """Return the provider's completion of ``prompt``, stripped."""
        try:
            if self._openai is not None:
                response = await self._openai.chat.completions.create(
                    model=self._openai_model,
                    messages=[{"role": "user", "content": prompt}],
                    max_tokens=max_tokens,
                    temperature=self._temperature,
                )
                text = response.choices[0].message.content or ""
            elif self._anthropic is not None:
                message = await self._anthropic.messages.create(
                    model=self._anthropic_model,
                    max_tokens=max_tokens,
                    temperature=self._temperature,
                    messages=[{"role": "user", "content": prompt}],
                )
                text = "".join(block.text for block in message.content if block.type == "text")
            else:
                logger.error("llm_not_configured", provider=self.provider)
                raise ProviderUnavailableError()
        except (OpenAIError, anthropic.AnthropicError) as exc:
            logger.warning("llm_request_failed", provider=self.provider, error=str(exc))
            raise ProviderUnavailableError() from exc

        text = text.strip()
        if not text:
            raise ProviderUnavailableError()
        return text


# Singleton
llm_client = LLMClient(settings)
