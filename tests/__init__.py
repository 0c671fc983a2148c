"""Test package for PDF Chat.

Unit tests cover isolated logic; integration tests drive the FastAPI app.

Structure:
    - unit/: Individual function and class tests
    - integration/: Upload and chat workflows through the HTTP API

Test PDFs are generated in memory by conftest. Provider backends are replaced
by scripted fakes or httpx.MockTransport, so no API key or network is needed.
Leverages pytest with pytest-check for soft assertions.
"""
