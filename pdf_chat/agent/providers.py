"""Hosted language-model backends behind one ``send`` interface.

Each client translates a uniform list of chat turns into its provider's wire
format, posts it with httpx and pulls the reply text back out.

Error contract:
    - Non-2xx responses, transport failures and bodies that are not the JSON
      shape the provider documents raise :class:`ProviderError`.
    - A well-formed response that simply carries no reply text returns
      :data:`EMPTY_RESPONSE` instead.

Sampling parameters are fixed per provider so that repeated runs against the
same document behave alike.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import Any

import httpx

from pdf_chat.models.schemas import ChatMessage, Role

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert AI assistant specialized in analyzing and discussing PDF "
    "documents. Provide detailed, accurate, and helpful responses based on the "
    "document content. Format your responses using markdown for better "
    "readability. Focus on being thorough and insightful in your analysis."
)

EMPTY_RESPONSE = "I apologize, but I couldn't generate a response."

DEFAULT_TIMEOUT = 120.0


class Provider(str, Enum):
    """Supported language-model backends."""

    GROQ = "groq"
    HUGGINGFACE = "huggingface"
    COHERE = "cohere"
    TOGETHER = "together"


class ProviderError(Exception):
    """Raised when a provider call fails at the transport, HTTP or parsing level.

    Attributes:
        provider: Backend that failed.
        status_code: HTTP status, or None when no response was received.
        provider_message: Error text reported by the provider, if any.
    """

    def __init__(
        self,
        provider: Provider,
        status_code: int | None,
        provider_message: str,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.provider_message = provider_message
        status = status_code if status_code is not None else "no response"
        super().__init__(f"{provider.value} API error: {status} - {provider_message}")


class ProviderClient(ABC):
    """Base class for provider clients.

    Args:
        api_key: Bearer token for the provider.
        http_client: Shared client to send requests with. A short-lived client
            is opened per request when omitted.
        timeout: Request timeout for the short-lived client.
    """

    provider: Provider
    url: str

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._api_key = api_key
        self._http_client = http_client
        self._timeout = timeout

    async def send(self, messages: Sequence[ChatMessage]) -> str:
        """Send the conversation and return the assistant's reply.

        Args:
            messages: Ordered turns, oldest first. The system persona is
                prepended automatically.

        Returns:
            Reply text, or :data:`EMPTY_RESPONSE` if the provider gave none.

        Raises:
            ProviderError: On any non-success outcome.
        """
        turns = [ChatMessage(role=Role.SYSTEM, content=SYSTEM_PROMPT), *messages]
        data = await self._post(self.build_payload(turns))
        try:
            reply = self.parse_reply(data)
            if reply is not None and not isinstance(reply, str):
                raise TypeError(f"reply is {type(reply).__name__}, expected str")
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError(self.provider, None, f"Malformed response body: {e}") from e
        return reply.strip() if reply and reply.strip() else EMPTY_RESPONSE

    @abstractmethod
    def build_payload(self, turns: list[ChatMessage]) -> dict[str, Any]:
        """Serialize turns (system persona first) into the request body."""

    @abstractmethod
    def parse_reply(self, data: Any) -> str | None:
        """Pull the reply text out of a decoded response body."""

    def error_message(self, data: Any) -> str:
        """Pull the error text out of a decoded error body."""
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict):
                return str(error.get("message") or "Unknown error")
            if error:
                return str(error)
            if data.get("message"):
                return str(data["message"])
        return "Unknown error"

    async def _post(self, payload: dict[str, Any]) -> Any:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        logger.debug(f"POST {self.url} ({self.provider.value})")
        try:
            if self._http_client is not None:
                response = await self._http_client.post(self.url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self.url, json=payload, headers=headers)
        except httpx.RequestError as e:
            raise ProviderError(self.provider, None, f"Connection failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            raise ProviderError(self.provider, response.status_code, self.error_message(data))
        if data is None:
            raise ProviderError(self.provider, response.status_code, "Response body is not JSON")
        return data


class _ChatCompletionsClient(ProviderClient):
    """OpenAI-style ``/chat/completions`` backends."""

    model: str
    max_tokens: int
    temperature = 0.7

    def build_payload(self, turns: list[ChatMessage]) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": t.role.value, "content": t.content} for t in turns],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    def parse_reply(self, data: Any) -> str | None:
        choices = data.get("choices") or []
        if not choices:
            return None
        message = choices[0].get("message") or {}
        return message.get("content")


class GroqClient(_ChatCompletionsClient):
    provider = Provider.GROQ
    url = "https://api.groq.com/openai/v1/chat/completions"
    model = "llama3-70b-8192"
    max_tokens = 2000
    top_p = 0.9

    def build_payload(self, turns: list[ChatMessage]) -> dict[str, Any]:
        payload = super().build_payload(turns)
        payload["top_p"] = self.top_p
        return payload


class TogetherClient(_ChatCompletionsClient):
    provider = Provider.TOGETHER
    url = "https://api.together.xyz/v1/chat/completions"
    model = "meta-llama/Llama-2-7b-chat-hf"
    max_tokens = 1500


class HuggingFaceClient(ProviderClient):
    """Text-generation models on the Hugging Face Inference API.

    The conversation is flattened into a single transcript ending with an open
    ``Assistant:`` turn; the reply is whatever the model wrote after the last
    such marker.
    """

    provider = Provider.HUGGINGFACE
    model = "microsoft/DialoGPT-large"
    url = f"https://api-inference.huggingface.co/models/{model}"

    _PREFIXES = {
        Role.SYSTEM: "System",
        Role.USER: "Human",
        Role.ASSISTANT: "Assistant",
    }

    @classmethod
    def flatten(cls, turns: Sequence[ChatMessage]) -> str:
        transcript = "\n\n".join(f"{cls._PREFIXES[t.role]}: {t.content}" for t in turns)
        return f"{transcript}\n\nAssistant:"

    def build_payload(self, turns: list[ChatMessage]) -> dict[str, Any]:
        return {
            "inputs": self.flatten(turns),
            "parameters": {
                "max_length": 1000,
                "temperature": 0.7,
                "do_sample": True,
            },
        }

    def parse_reply(self, data: Any) -> str | None:
        if not data:
            return None
        generated = data[0].get("generated_text")
        if not generated:
            return None
        return generated.rpartition("Assistant:")[2]


class CohereClient(ProviderClient):
    """Cohere chat API: the last turn is the message, the rest is history."""

    provider = Provider.COHERE
    url = "https://api.cohere.ai/v1/chat"
    model = "command-light"

    _ROLES = {
        Role.SYSTEM: "SYSTEM",
        Role.USER: "USER",
        Role.ASSISTANT: "CHATBOT",
    }

    def build_payload(self, turns: list[ChatMessage]) -> dict[str, Any]:
        *history, last = turns
        return {
            "model": self.model,
            "message": last.content,
            "chat_history": [
                {"role": self._ROLES[t.role], "message": t.content} for t in history
            ],
            "temperature": 0.7,
            "max_tokens": 1000,
        }

    def parse_reply(self, data: Any) -> str | None:
        return data.get("text")


PROVIDER_CLIENTS: dict[Provider, type[ProviderClient]] = {
    Provider.GROQ: GroqClient,
    Provider.HUGGINGFACE: HuggingFaceClient,
    Provider.COHERE: CohereClient,
    Provider.TOGETHER: TogetherClient,
}


def create_client(
    provider: Provider,
    api_key: str,
    http_client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ProviderClient:
    """Instantiate the client class registered for ``provider``."""
    return PROVIDER_CLIENTS[provider](api_key, http_client=http_client, timeout=timeout)
