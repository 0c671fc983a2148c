"""FastAPI application: upload and chat routers behind permissive CORS."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdf_chat.api.chat import router as chat_router
from pdf_chat.api.routes import router as upload_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting PDF Chat API...")
    yield
    logger.info("Shutting down PDF Chat API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="PDF Chat API",
        description=(
            "Upload a PDF and chat with an AI assistant about its content. "
            "Answers are grounded in the document's extracted text and served "
            "by Groq, Hugging Face, Cohere or Together depending on the API key."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(upload_router)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "pdf-chat"}

    return application


app = create_app()
