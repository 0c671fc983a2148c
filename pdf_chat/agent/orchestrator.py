"""Provider selection and the single-fallback policy.

State machine:

    no key      -> demo text, no network call
    key present -> primary attempt -> success
                                   -> failure -> Groq fallback (only when the
                                                 primary was not Groq)
                                              -> connectivity apology

Each attempt is all-or-nothing: the fallback starts from the same messages and
nothing from a failed attempt is kept. Provider errors never escape
:meth:`ChatOrchestrator.get_response`.
"""

import logging
from collections.abc import Callable, Sequence

from pydantic import BaseModel, model_validator

from pdf_chat.agent.providers import (
    DEFAULT_TIMEOUT,
    Provider,
    ProviderClient,
    ProviderError,
    create_client,
)
from pdf_chat.models.schemas import ChatMessage, Role

logger = logging.getLogger(__name__)

CONNECTION_APOLOGY = (
    "I'm having trouble connecting to the AI service. "
    "Please check your API key and try again."
)

_KEY_PREFIXES: tuple[tuple[str, Provider], ...] = (
    ("gsk_", Provider.GROQ),
    ("hf_", Provider.HUGGINGFACE),
    ("co-", Provider.COHERE),
)

ClientFactory = Callable[[Provider, str], ProviderClient]


def infer_provider(api_key: str) -> Provider:
    """Classify a key by prefix. Unknown shapes go to Groq."""
    for prefix, provider in _KEY_PREFIXES:
        if api_key.startswith(prefix):
            return provider
    return Provider.GROQ


class ProviderCredential(BaseModel):
    """An API key and the backend it belongs to.

    ``provider`` is inferred from the key prefix unless given explicitly.
    """

    key: str
    provider: Provider | None = None

    @model_validator(mode="after")
    def _infer_provider(self) -> "ProviderCredential":
        self.key = self.key.strip()
        if self.provider is None and self.key:
            self.provider = infer_provider(self.key)
        return self

    @property
    def is_configured(self) -> bool:
        return bool(self.key)


def demo_response(user_message: str) -> str:
    """Static instructions returned when no API key is configured."""
    quoted = user_message[:100] + ("..." if len(user_message) > 100 else "")
    return f"""**🆓 Free AI Assistant - PDF Analysis**

I can see you're asking: "{quoted}"

To get real AI analysis of your PDF using **FREE APIs**, please get an API key from one of these providers:

## 🚀 **Recommended Free Options:**

### **1. Groq (BEST FREE OPTION)**
- ✅ **Completely FREE** with generous limits
- ✅ **Very fast responses**
- ✅ **High-quality Llama models**
- 🔗 Get your free key: [console.groq.com](https://console.groq.com)
- 🔑 Key format: `gsk_...`

### **2. Hugging Face**
- ✅ **Free tier available**
- ✅ **Multiple model options**
- 🔗 Get your free key: [huggingface.co/settings/tokens](https://huggingface.co/settings/tokens)
- 🔑 Key format: `hf_...`

### **3. Cohere**
- ✅ **Free trial credits**
- ✅ **Good for text analysis**
- 🔗 Get your free key: [dashboard.cohere.ai](https://dashboard.cohere.ai)
- 🔑 Key format: `co-...`

## 🎯 **How to Use:**
1. **Open the API key settings**
2. **Enter your free API key**
3. **Ask your question again** to get detailed AI analysis

**Your PDF is ready** - just add a free API key to start the intelligent conversation! 🚀

*Tip: Groq is recommended as it's free and very fast!*"""


class ChatOrchestrator:
    """Routes a prompt to the right provider and applies the fallback policy.

    Args:
        client_factory: Builds a client for a provider and key. Defaults to
            :func:`create_client` with ``timeout``.
        timeout: Request timeout used by the default factory.
    """

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client_factory = client_factory or (
            lambda provider, key: create_client(provider, key, timeout=timeout)
        )

    async def get_response(
        self,
        user_message: str,
        credential: ProviderCredential | None,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Get the assistant's reply to ``user_message``.

        Args:
            user_message: Full prompt for this turn.
            credential: Key to call the provider with. None or an empty key
                selects demo mode.
            history: Earlier turns, oldest first.

        Returns:
            Reply text, the demo text, or the connectivity apology.
        """
        if credential is None or not credential.is_configured:
            return demo_response(user_message)

        messages = [*history, ChatMessage(role=Role.USER, content=user_message)]
        primary = credential.provider or infer_provider(credential.key)

        try:
            return await self._send(primary, credential.key, messages)
        except ProviderError as e:
            logger.warning(f"Primary provider {primary.value} failed: {e}")

        if primary is Provider.GROQ:
            return CONNECTION_APOLOGY

        try:
            return await self._send(Provider.GROQ, credential.key, messages)
        except ProviderError as e:
            logger.error(f"Fallback provider {Provider.GROQ.value} failed: {e}")
            return CONNECTION_APOLOGY

    async def _send(
        self,
        provider: Provider,
        api_key: str,
        messages: Sequence[ChatMessage],
    ) -> str:
        client = self._client_factory(provider, api_key)
        return await client.send(messages)
