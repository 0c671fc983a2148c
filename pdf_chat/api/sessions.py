"""In-memory chat sessions, one uploaded document each.

Sessions live for the lifetime of the process and are never persisted.
"""

import logging
import uuid

from pdf_chat.agent.config import ChatConfig, get_chat_config
from pdf_chat.agent.conversation import ConversationState
from pdf_chat.agent.orchestrator import ChatOrchestrator
from pdf_chat.models.schemas import Document

logger = logging.getLogger(__name__)


class SessionStore:
    """Maps session ids to their conversation state."""

    def __init__(
        self,
        orchestrator: ChatOrchestrator | None = None,
        config: ChatConfig | None = None,
    ) -> None:
        self._config = config or get_chat_config()
        self._orchestrator = orchestrator or ChatOrchestrator(
            timeout=self._config.request_timeout
        )
        self._sessions: dict[str, ConversationState] = {}

    @property
    def config(self) -> ChatConfig:
        return self._config

    def create(
        self, document: Document, api_key: str | None = None
    ) -> tuple[str, ConversationState]:
        """Start a conversation for ``document``.

        Falls back to the configured default key when ``api_key`` is empty.
        The configured provider override applies to that default key only.
        """
        state = ConversationState(document, self._orchestrator, config=self._config)
        if api_key and api_key.strip():
            state.set_api_key(api_key)
        else:
            state.set_api_key(self._config.api_key, provider=self._config.provider)
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = state
        logger.info(f"Created session {session_id[:8]} for {document.display_name}")
        return session_id, state

    def get(self, session_id: str) -> ConversationState | None:
        return self._sessions.get(session_id)

    def __len__(self) -> int:
        return len(self._sessions)


# Module-level singleton instance
_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get or create the global session store."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
