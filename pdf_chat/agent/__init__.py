"""LLM orchestration for document-grounded chat.

Responsibilities:
    - Prompt construction from the extracted document text
    - Provider clients for Groq, Hugging Face, Cohere and Together
    - Provider selection by key prefix with a single fallback to Groq
    - Conversation state for one uploaded document

Maintains clean separation from the HTTP and UI layers.
"""

from pdf_chat.agent.config import ChatConfig, get_chat_config
from pdf_chat.agent.conversation import ConversationState
from pdf_chat.agent.orchestrator import ChatOrchestrator, ProviderCredential, infer_provider
from pdf_chat.agent.providers import Provider, ProviderClient, ProviderError

__all__ = [
    "ChatConfig",
    "ChatOrchestrator",
    "ConversationState",
    "Provider",
    "ProviderClient",
    "ProviderCredential",
    "ProviderError",
    "get_chat_config",
    "infer_provider",
]
