# backend/docchat/models/llm/azure_chat_generator.py

from __future__ import annotations
from typing import List
import logging
import requests

from docchat.core.entities import ChatMessage
from docchat.core.ports.generator import GenerationError, IChatGenerator

logger = logging.getLogger("docchat.llm.azure")

NO_RESPONSE = "No response from AI model"
API_ERROR = "Azure API error"
INVALID_RESPONSE = "Invalid response structure"
REQUEST_FAILED = "Chat request failed"


class AzureChatGenerator(IChatGenerator):
    """Chat completions against an Azure OpenAI deployment over its REST API."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        deployment: str,
        api_version: str = "2024-05-01-preview",
        max_tokens: int = 4096,
        temperature: float = 1.0,
        top_p: float = 1.0,
        timeout: int = 120,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.deployment = deployment
        self.api_version = api_version
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.top_p = top_p
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.endpoint}/openai/deployments/{self.deployment}/chat/completions"

    def complete(self, messages: List[ChatMessage]) -> str:
        payload = {
            "messages": [m.to_dict() for m in messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
        }
        try:
            r = requests.post(
                self.url,
                params={"api-version": self.api_version},
                headers={"api-key": self.api_key, "Content-Type": "application/json"},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GenerationError(REQUEST_FAILED, str(e)) from e

        try:
            body = r.json() if r.content else None
        except ValueError:
            body = None

        if not body:
            if not r.ok:
                raise GenerationError(REQUEST_FAILED, f"HTTP {r.status_code}")
            raise GenerationError(NO_RESPONSE, f"HTTP {r.status_code}")

        if isinstance(body, dict) and body.get("error"):
            err = body["error"]
            msg = err.get("message") if isinstance(err, dict) else str(err)
            raise GenerationError(API_ERROR, msg or "Unknown error")

        if not r.ok:
            raise GenerationError(REQUEST_FAILED, f"HTTP {r.status_code}")

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            raise GenerationError(INVALID_RESPONSE, "missing choices[0].message.content")

        logger.debug(f"🤖 Azure reply received | deployment={self.deployment} | chars={len(content)}")
        return content
