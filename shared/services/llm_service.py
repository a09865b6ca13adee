"""
LLM Service — Centralized interface for all LLM API calls.

Wraps the OpenAI Chat Completions API. Two entry points:
- `call()` for single-prompt completions (topic assessment, question generation)
- `chat()` for multi-turn conversations with function-calling tools (the assistant)
"""

import json
import time
from typing import Dict, Any, List, Optional
from openai import OpenAI, OpenAIError, RateLimitError, APITimeoutError
import logging

from lexio.exceptions import LLMServiceError

logger = logging.getLogger(__name__)


class LLMService:
    """
    Service for making LLM API calls with retry logic and error handling.

    Rate limits and timeouts are retried with exponential backoff; any other
    OpenAI error fails fast as LLMServiceError.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model_id: str = "gpt-4o-mini",
        max_retries: int = 3,
        initial_retry_delay: float = 1.0,
        timeout: int = 60,
        temperature: float = 0.7,
    ):
        self.client = OpenAI(api_key=api_key)
        self.model_id = model_id
        self.max_retries = max_retries
        self.initial_retry_delay = initial_retry_delay
        self.timeout = timeout
        self.temperature = temperature

    # ─── Primary entry points ──────────────────────────────────────────

    def call(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        json_mode: bool = False,
        max_tokens: int = 2048,
    ) -> Dict[str, Any]:
        """
        Single-prompt completion.

        Always returns: {output_text: str, reasoning: None}
        """
        logger.info(json.dumps({
            "step": "LLM_CALL",
            "status": "starting",
            "model": self.model_id,
            "params": {"json_mode": json_mode, "has_system_prompt": system_prompt is not None}
        }))

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        def _api_call():
            kwargs = {
                "model": self.model_id,
                "messages": messages,
                "max_completion_tokens": max_tokens,
                "temperature": self.temperature,
                "timeout": self.timeout,
            }
            if json_mode:
                kwargs["response_format"] = {"type": "json_object"}
            response = self.client.chat.completions.create(**kwargs)
            return response.choices[0].message.content or ""

        text = self._execute_with_retry(_api_call, self.model_id)
        return {"output_text": text, "reasoning": None}

    def chat(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        max_tokens: int = 1024,
    ) -> Any:
        """
        Multi-turn completion with optional function-calling tools.

        Returns the assistant message object (with `content` and `tool_calls`).
        """
        logger.info(json.dumps({
            "step": "LLM_CHAT",
            "status": "starting",
            "model": self.model_id,
            "params": {"messages": len(messages), "tools": len(tools or [])}
        }))

        def _api_call():
            kwargs = {
                "model": self.model_id,
                "messages": messages,
                "max_completion_tokens": max_tokens,
                "temperature": self.temperature,
                "timeout": self.timeout,
            }
            if tools:
                kwargs["tools"] = tools
                kwargs["tool_choice"] = "auto"
            response = self.client.chat.completions.create(**kwargs)
            return response.choices[0].message

        return self._execute_with_retry(_api_call, self.model_id)

    # ─── Helpers ──────────────────────────────────────────────────────

    def _execute_with_retry(self, api_call_fn, model_name: str) -> Any:
        """Execute API call with exponential backoff retry logic."""
        last_error = None
        delay = self.initial_retry_delay
        start_time = time.time()

        for attempt in range(self.max_retries):
            try:
                result = api_call_fn()
                duration_ms = int((time.time() - start_time) * 1000)

                logger.info(json.dumps({
                    "step": "LLM_CALL",
                    "status": "complete",
                    "model": model_name,
                    "duration_ms": duration_ms,
                    "attempts": attempt + 1
                }))

                if attempt > 0:
                    logger.info(f"{model_name} call succeeded on attempt {attempt + 1}")
                return result

            except RateLimitError as e:
                last_error = e
                logger.warning(
                    f"{model_name} rate limit hit (attempt {attempt + 1}/{self.max_retries}). "
                    f"Retrying in {delay}s..."
                )
                time.sleep(delay)
                delay *= 2

            except APITimeoutError as e:
                last_error = e
                logger.warning(
                    f"{model_name} timeout (attempt {attempt + 1}/{self.max_retries}). "
                    f"Retrying in {delay}s..."
                )
                time.sleep(delay)
                delay *= 2

            except OpenAIError as e:
                logger.error(f"{model_name} API error: {str(e)}")
                raise LLMServiceError(
                    f"{model_name} API error: {str(e)}", model_name=model_name, attempts=attempt + 1
                ) from e

            except Exception as e:
                logger.error(f"{model_name} unexpected error: {str(e)}")
                raise LLMServiceError(
                    f"{model_name} unexpected error: {str(e)}", model_name=model_name, attempts=attempt + 1
                ) from e

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(json.dumps({
            "step": "LLM_CALL",
            "status": "failed",
            "model": model_name,
            "error": str(last_error),
            "duration_ms": duration_ms,
            "attempts": self.max_retries
        }))
        raise LLMServiceError(
            f"{model_name} failed after {self.max_retries} attempts. Last error: {str(last_error)}",
            model_name=model_name,
            attempts=self.max_retries,
        ) from last_error
