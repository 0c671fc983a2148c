"""NiceGUI page: upload a PDF, then chat with the assistant about it."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from nicegui import events, run, ui

from pdf_chat.agent.conversation import ConversationState
from pdf_chat.api.sessions import get_session_store
from pdf_chat.models.schemas import Message, Role
from pdf_chat.parsing.pdf_parser import PDFChatError, load_document

logger = logging.getLogger(__name__)

SUGGESTED_QUESTIONS = [
    "What are the main conclusions of this document?",
    "Can you summarize the key findings in bullet points?",
    "What are the most important points I should know?",
    "Are there any recommendations or action items mentioned?",
    "What is the overall purpose of this document?",
]

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    body { background: #f5f5f5; min-height: 100vh; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .header { background: linear-gradient(135deg, #10b981 0%, #2563eb 100%); }
    .message-user {
        background: linear-gradient(135deg, #10b981 0%, #2563eb 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main page."""
    ui.add_head_html(CUSTOM_CSS)
    store = get_session_store()
    state: ConversationState | None = None
    api_key = store.config.api_key

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button
    clear_btn: ui.button

    def render_message(msg: Message) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    ui.markdown(msg.content).classes("text-sm leading-relaxed")
                ui.label(msg.created_at.strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def refresh() -> None:
        messages_container.clear()
        with messages_container:
            if state is None:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("picture_as_pdf").classes("text-5xl text-gray-300")
                    ui.label("Upload a PDF to start").classes("text-lg text-gray-400")
                return
            for msg in state.messages:
                render_message(msg)
            if state.is_loading:
                ui.spinner("dots").classes("text-gray-400")
            if len(state.messages) == 1 and state.input_enabled:
                with ui.row().classes("w-full gap-2"):
                    for question in SUGGESTED_QUESTIONS:
                        ui.button(
                            question, on_click=lambda q=question: ask(q)
                        ).props("flat dense no-caps").classes("text-xs")

        enabled = state is not None and state.input_enabled
        for control in (input_field, send_btn, clear_btn):
            control.set_enabled(enabled)

    async def refresh_during(action: Coroutine[Any, Any, Any]) -> None:
        # Let the action append its optimistic messages before rendering.
        task = asyncio.create_task(action)
        await asyncio.sleep(0)
        refresh()
        await task
        refresh()

    async def ask(text: str) -> None:
        if state is None:
            return
        input_field.value = ""
        await refresh_during(state.submit(text))

    async def send_message() -> None:
        if state is None or not state.input_enabled or not input_field.value.strip():
            return
        await ask(input_field.value)

    async def clear_conversation() -> None:
        if state is None:
            return
        await refresh_during(state.clear())

    async def handle_upload(e: events.UploadEventArguments) -> None:
        nonlocal state
        try:
            document = await run.io_bound(
                load_document,
                await e.file.read(),
                e.file.name,
                max_size=store.config.max_file_size,
            )
        except PDFChatError as err:
            logger.warning(f"Rejected upload {e.file.name}: {err}")
            ui.notify(str(err), type="negative")
            return

        _, state = store.create(document, api_key)
        ui.notify(
            f"Successfully extracted {len(document.extracted_text)} characters "
            f"from {document.display_name}",
            type="positive",
        )
        await refresh_during(state.load_document())

    def update_api_key(e: events.ValueChangeEventArguments) -> None:
        nonlocal api_key
        api_key = e.value or ""
        if state is not None:
            state.set_api_key(api_key)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("psychology").classes("text-white text-3xl")
                ui.label("PDF AI Assistant").classes("text-lg font-semibold text-white")
            clear_btn = ui.button(icon="delete_sweep", on_click=clear_conversation).props(
                "flat round color=white"
            )

        with ui.row().classes("w-full px-5 pt-4 gap-3 items-center"):
            ui.upload(
                label="PDF up to 10MB",
                on_upload=handle_upload,
                auto_upload=True,
                max_files=1,
            ).props('accept=".pdf"').classes("flex-grow")
            ui.input(
                label="API key (gsk_, hf_ or co-)",
                value=api_key,
                password=True,
                password_toggle_button=True,
                on_change=update_api_key,
            ).classes("w-64")

        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            input_field = (
                ui.textarea(placeholder="Ask a question about the document...")
                .props("autogrow borderless dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    refresh()


def main() -> None:
    ui.run(title="PDF AI Assistant", port=8080, reload=False)


if __name__ == "__main__":
    main()
