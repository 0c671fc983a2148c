"""PDF Chat - converse with an AI assistant about an uploaded PDF.

Combines FastAPI for the HTTP API, httpx for the language-model backends,
NiceGUI for the web interface, and Pydantic for data validation.

Components:
    - parsing: PDF validation and text extraction
    - agent: prompts, provider clients, fallback policy and conversation state
    - api: HTTP endpoints and in-memory sessions
    - ui: Web interface for chat interactions
    - models: Data and request/response schemas
"""

__version__ = "0.1.0"
