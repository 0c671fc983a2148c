"""Conversation log for one uploaded document.

Events:
    - ``load_document``: automatic analysis turn behind an "analyzing"
      placeholder that is replaced in place by the result.
    - ``submit``: user question, answered from the cached document text.
    - ``clear``: empties the log and runs the analysis turn again.

Only one request is in flight at a time. ``input_enabled`` mirrors that and
is what the UI binds its input controls to.

Every reset bumps a generation number. A reply that resolves after the log
was reset belongs to an older generation and is dropped.
"""

import logging

from pdf_chat.agent.config import ChatConfig, get_chat_config
from pdf_chat.agent.orchestrator import ChatOrchestrator, ProviderCredential
from pdf_chat.agent.prompts import build_analysis_prompt, build_question_prompt
from pdf_chat.agent.providers import Provider
from pdf_chat.models.schemas import Document, Message, Role

logger = logging.getLogger(__name__)

ANALYSIS_ERROR = (
    "❌ I encountered an error while analyzing your PDF. The AI service might be "
    "temporarily unavailable. Please try asking me a question about the document, "
    "or check your API key in settings."
)
QUESTION_ERROR = (
    "❌ I apologize, but I encountered an error while processing your question. "
    "Please check your API key and try again."
)


def analyzing_placeholder(document: Document) -> str:
    return (
        f"📄 **PDF Loaded: {document.display_name}**\n\n"
        "I'm analyzing your PDF document... Please wait while I process the content."
    )


class ConversationState:
    """Ordered message log and request state for a single document.

    Args:
        document: The uploaded document. Its text is reused for every prompt.
        orchestrator: Dispatches prompts to a provider.
        credential: Provider key supplied by the user, if any.
        config: Prompt budgets and history window.
    """

    def __init__(
        self,
        document: Document,
        orchestrator: ChatOrchestrator,
        credential: ProviderCredential | None = None,
        config: ChatConfig | None = None,
    ) -> None:
        self.document = document
        self.credential = credential
        self._orchestrator = orchestrator
        self._config = config or get_chat_config()
        self._messages: list[Message] = []
        self._generation = 0
        self.is_loading = False
        self.is_analyzing = False

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_busy(self) -> bool:
        return self.is_loading or self.is_analyzing

    @property
    def input_enabled(self) -> bool:
        return not self.is_busy

    def set_api_key(self, api_key: str | None, provider: Provider | None = None) -> None:
        """Replace the credential used for subsequent requests.

        The provider follows the key prefix unless ``provider`` is given.
        """
        if api_key and api_key.strip():
            self.credential = ProviderCredential(key=api_key, provider=provider)
        else:
            self.credential = None

    async def load_document(self) -> Message:
        """Run the analysis turn that opens every conversation.

        Returns:
            The message that replaced the placeholder.
        """
        generation = self._generation
        placeholder = Message(role=Role.ASSISTANT, content=analyzing_placeholder(self.document))
        self._messages.append(placeholder)
        self.is_analyzing = True

        prompt = build_analysis_prompt(
            self.document.extracted_text,
            self.document.display_name,
            char_limit=self._config.analysis_char_limit,
        )
        try:
            content = await self._orchestrator.get_response(prompt, self.credential)
        except Exception:
            logger.exception(f"Analysis of {self.document.display_name} failed")
            content = ANALYSIS_ERROR

        result = Message(role=Role.ASSISTANT, content=content)
        if generation != self._generation:
            logger.info("Discarding analysis result from a cleared conversation")
            return result

        self.is_analyzing = False
        index = next(i for i, m in enumerate(self._messages) if m.id == placeholder.id)
        self._messages[index] = result
        return result

    async def submit(self, text: str) -> Message | None:
        """Ask a question about the document.

        Returns:
            The assistant's reply, or None when the input was rejected because
            it was blank or another request is in flight.
        """
        question = text.strip() if text else ""
        if not question or self.is_busy:
            return None

        generation = self._generation
        window = self._config.history_window
        history = [m.to_chat_message() for m in self._messages[-window:]] if window else []

        self._messages.append(Message(role=Role.USER, content=question))
        self.is_loading = True

        prompt = build_question_prompt(
            self.document.extracted_text,
            self.document.display_name,
            question,
            char_limit=self._config.question_char_limit,
        )
        try:
            content = await self._orchestrator.get_response(prompt, self.credential, history)
        except Exception:
            logger.exception("Answering question failed")
            content = QUESTION_ERROR

        reply = Message(role=Role.ASSISTANT, content=content)
        if generation != self._generation:
            logger.info("Discarding reply from a cleared conversation")
            return reply

        self.is_loading = False
        self._messages.append(reply)
        return reply

    async def clear(self) -> Message:
        """Empty the log and re-run the analysis against the cached text."""
        self._reset()
        return await self.load_document()

    def _reset(self) -> None:
        self._generation += 1
        self._messages.clear()
        self.is_loading = False
        self.is_analyzing = False
