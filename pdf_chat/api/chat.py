"""Chat endpoints for asking questions about an uploaded document."""

import logging

from fastapi import APIRouter, HTTPException, status

from pdf_chat.agent.conversation import ConversationState
from pdf_chat.api.sessions import get_session_store
from pdf_chat.models.schemas import ChatRequest, ChatResponse, SessionInfo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


def _get_state(session_id: str) -> ConversationState:
    state = get_session_store().get(session_id)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found. Upload a PDF to start a conversation.",
        )
    return state


def _reject_if_busy(state: ConversationState) -> None:
    if state.is_busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A request for this conversation is already in progress",
        )


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest) -> ChatResponse:
    """Answer a question from the session's document.

    Provider failures never surface as HTTP errors; they come back as an
    apology in ``response``.

    Raises:
        404: Unknown session.
        409: Another request for the session is still running.
        422: Blank message.
    """
    state = _get_state(request.session_id)
    _reject_if_busy(state)

    if request.api_key is not None:
        state.set_api_key(request.api_key)

    reply = await state.submit(request.message)
    if reply is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The message was not accepted by this conversation",
        )

    return ChatResponse(
        session_id=request.session_id,
        response=reply.content,
        messages=state.messages,
    )


@router.post("/sessions/{session_id}/clear", response_model=SessionInfo)
async def clear_session(session_id: str) -> SessionInfo:
    """Clear the conversation and re-run the document analysis."""
    state = _get_state(session_id)
    await state.clear()
    return _session_info(session_id, state)


@router.get("/sessions/{session_id}", response_model=SessionInfo)
async def get_session(session_id: str) -> SessionInfo:
    """Return the conversation log of a session."""
    return _session_info(session_id, _get_state(session_id))


def _session_info(session_id: str, state: ConversationState) -> SessionInfo:
    return SessionInfo(
        session_id=session_id,
        filename=state.document.display_name,
        messages=state.messages,
        is_busy=state.is_busy,
    )
