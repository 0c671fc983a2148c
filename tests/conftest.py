"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - make_pdf: Builds small text PDFs in memory
    - sample_pdf: Two-page PDF with known text
    - chat_config: Configuration in demo mode (no API key)
    - fake_clients: Scriptable provider clients recording every call
    - session_store: Fresh global session store wired to the fake clients
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncGenerator, Callable, Generator, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

import pdf_chat.api.sessions as sessions_module
from pdf_chat.agent.config import ChatConfig
from pdf_chat.agent.orchestrator import ChatOrchestrator
from pdf_chat.agent.providers import Provider, ProviderError
from pdf_chat.api import app
from pdf_chat.api.sessions import SessionStore
from pdf_chat.models.schemas import ChatMessage


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[str], title: str | None = None) -> bytes:
    """Assemble a minimal PDF with one Helvetica text block per page.

    Lines in a page's text are separated by newlines. An empty string gives a
    page without any text, like a scanned image.
    """
    objects: dict[int, bytes] = {}
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)

    objects[1] = b"<< /Type /Catalog /Pages 2 0 R >>"
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode()
    objects[3] = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"

    for pid, text in zip(page_ids, pages, strict=True):
        ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
        ops += [f"({_escape(line)}) Tj T*" for line in text.split("\n") if line]
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
        objects[pid] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
        ).encode()
        objects[pid + 1] = (
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    trailer_extra = ""
    if title is not None:
        info_id = 4 + 2 * len(pages)
        objects[info_id] = f"<< /Title ({_escape(title)}) >>".encode("latin-1")
        trailer_extra = f" /Info {info_id} 0 R"

    out = bytearray(b"%PDF-1.4\n")
    offsets: dict[int, int] = {}
    for obj_id in sorted(objects):
        offsets[obj_id] = len(out)
        out += b"%d 0 obj\n" % obj_id + objects[obj_id] + b"\nendobj\n"

    size = max(objects) + 1
    xref_at = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % size
    for obj_id in range(1, size):
        out += b"%010d 00000 n \n" % offsets[obj_id]
    out += f"trailer\n<< /Size {size} /Root 1 0 R{trailer_extra} >>\n".encode()
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return the in-memory PDF builder."""
    return build_pdf


@pytest.fixture
def sample_pdf() -> bytes:
    """Two-page PDF with known text on each page."""
    return build_pdf(
        ["Information security basics\nKeep secrets secret", "Second page text"],
        title="Security Handbook",
    )


@pytest.fixture
def chat_config() -> ChatConfig:
    """Configuration with no API key, so every request runs in demo mode."""
    return ChatConfig(
        api_key="",
        provider=None,
        analysis_char_limit=12000,
        question_char_limit=8000,
        history_window=6,
        max_file_size=1024 * 1024,
    )


class FakeProviderClient:
    """Provider client that replies or fails as scripted."""

    def __init__(self, provider: Provider, api_key: str, calls: list, script: dict) -> None:
        self.provider = provider
        self.api_key = api_key
        self._calls = calls
        self._script = script

    async def send(self, messages: Sequence[ChatMessage]) -> str:
        self._calls.append((self.provider, self.api_key, list(messages)))
        outcome = self._script.get(self.provider, f"{self.provider.value} reply")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeClients:
    """Factory for :class:`FakeProviderClient` with a shared call log.

    Set ``script[provider]`` to a reply string or to an exception to raise.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[Provider, str, list[ChatMessage]]] = []
        self.script: dict[Provider, str | Exception] = {}

    def fail(self, provider: Provider, status_code: int = 500) -> None:
        self.script[provider] = ProviderError(provider, status_code, "boom")

    def __call__(self, provider: Provider, api_key: str) -> FakeProviderClient:
        return FakeProviderClient(provider, api_key, self.calls, self.script)

    @property
    def providers(self) -> list[Provider]:
        return [provider for provider, _, _ in self.calls]


@pytest.fixture
def fake_clients() -> FakeClients:
    """Scriptable provider clients recording every call."""
    return FakeClients()


@pytest.fixture
def session_store(
    chat_config: ChatConfig, fake_clients: FakeClients
) -> Generator[SessionStore]:
    """Install a fresh global session store for the duration of a test."""
    store = SessionStore(
        orchestrator=ChatOrchestrator(client_factory=fake_clients),
        config=chat_config,
    )
    previous = sessions_module._session_store
    sessions_module._session_store = store
    yield store
    sessions_module._session_store = previous


@pytest.fixture
async def async_client(session_store: SessionStore) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
