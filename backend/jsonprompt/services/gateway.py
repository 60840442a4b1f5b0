import time
import logging
from dataclasses import dataclass
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from ..config import Settings
from ..errors import InputError, ProviderError

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "OpenAI API key is missing. Please configure OPENAI_API_KEY environment variable."


@dataclass(frozen=True)
class GatewayResponse:
    raw_text: str
    tokens_used: Optional[int] = None


class LLMGateway:
    """Single-shot chat completion calls against the configured OpenAI model.

    One instance is built per process and shared by every request. The
    underlying client is created on first use so a missing key only fails
    the calls that need it.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: Optional[AsyncOpenAI] = None

    @property
    def configured(self) -> bool:
        return self._settings.llm_configured

    def _get_client(self) -> AsyncOpenAI:
        if not self._settings.openai_api_key:
            raise ProviderError(MISSING_KEY_MESSAGE)
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._settings.openai_api_key)
        return self._client

    async def generate(
        self,
        system_instructions: str,
        user_prompt: str,
        temperature: float,
        *,
        operation: str = "unspecified",
    ) -> GatewayResponse:
        if not user_prompt or not user_prompt.strip():
            raise InputError("user prompt must not be empty")
        if not 0.0 <= temperature <= 1.0:
            raise InputError("temperature must be between 0 and 1")

        client = self._get_client()
        t0 = time.perf_counter()
        try:
            resp = await client.chat.completions.create(
                model=self._settings.openai_model,
                messages=[
                    {"role": "system", "content": system_instructions},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=self._settings.openai_max_tokens,
            )
        except OpenAIError as exc:
            logger.error("llm_call op=%s model=%s failed: %s", operation, self._settings.openai_model, exc)
            raise ProviderError(str(exc) or "LLM request failed") from exc

        dt_ms = (time.perf_counter() - t0) * 1000.0
        usage = getattr(resp, "usage", None)
        tokens = getattr(usage, "total_tokens", None) if usage is not None else None

        logger.info(
            "llm_call op=%s model=%s latency_ms=%.1f tokens=%s",
            operation,
            self._settings.openai_model,
            dt_ms,
            tokens,
        )

        try:
            text = resp.choices[0].message.content or ""
        except (AttributeError, IndexError):
            text = ""
        return GatewayResponse(raw_text=text, tokens_used=int(tokens) if tokens is not None else None)
