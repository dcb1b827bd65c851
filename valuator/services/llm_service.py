import asyncio
import time
import os
import logging
from openai import AzureOpenAI, OpenAI
from dotenv import load_dotenv

from valuator.models.report import LLMCallLog

load_dotenv()
logger = logging.getLogger(__name__)


class LLMConfigurationError(RuntimeError):
    """Raised when no API key is configured for the narrative model."""


class LLMService:
    def __init__(self):
        api_key = os.getenv("OPENAI_API_KEY")
        azure_endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")
        self.temperature = 0.3
        self.max_tokens = 1500
        self.call_logs: list[LLMCallLog] = []

        if azure_endpoint:
            self.model = os.getenv("AZURE_OPENAI_DEPLOYMENT_NAME", "gpt-4o-mini")
            self.client = AzureOpenAI(
                azure_endpoint=azure_endpoint,
                api_key=api_key,
                api_version=os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview"),
            ) if api_key else None
        else:
            self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
            self.client = OpenAI(api_key=api_key) if api_key else None

        if self.client is None:
            logger.warning("OPENAI_API_KEY not set; narratives will use the fallback text")

    async def text_completion(
        self,
        system_prompt: str,
        user_prompt: str,
        step_name: str,
        call_logs: list[LLMCallLog] | None = None,
    ) -> str:
        """Call the chat model for a free-text response (e.g., narrative generation).

        The call is logged to ``call_logs`` when given, otherwise to ``self.call_logs``.
        """
        return await asyncio.to_thread(
            self._text_completion_sync, system_prompt, user_prompt, step_name, call_logs,
        )

    def _text_completion_sync(
        self,
        system_prompt: str,
        user_prompt: str,
        step_name: str,
        call_logs: list[LLMCallLog] | None = None,
    ) -> str:
        if self.client is None:
            raise LLMConfigurationError("LLM configuration missing")

        start = time.time()
        response = self.client.chat.completions.create(
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        duration_ms = (time.time() - start) * 1000
        content = response.choices[0].message.content or "Analysis unavailable"
        tokens = response.usage.total_tokens if response.usage else None

        logger.info(
            f"LLM text call [{step_name}]: model={self.model}, "
            f"tokens={tokens}, duration={duration_ms:.0f}ms"
        )
        logger.info(f"LLM [{step_name}] response: {content[:500]}...")

        log = call_logs if call_logs is not None else self.call_logs
        log.append(LLMCallLog(
            step_name=step_name,
            model=self.model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            response=content,
            tokens_used=tokens,
            duration_ms=duration_ms,
        ))
        return content
