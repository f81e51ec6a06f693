import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from docportal.config import settings
from docportal.exceptions import DocumentPortalError
from docportal.routers import documents
from docportal.services.document_store import DocumentStore

logger = logging.getLogger("docportal")

VERSION = "0.1.0"


async def portal_error_handler(request: Request, exc: DocumentPortalError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def create_app(store: DocumentStore | None = None) -> FastAPI:
    """Build the API around one document store.

    Without an explicit store one is built from ``settings`` at startup and
    closed again at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = store is None
        app.state.document_store = DocumentStore.from_settings(settings) if owned else store
        yield
        if owned:
            app.state.document_store.close()

    app = FastAPI(
        title="Document Portal",
        description="Upload, list, download and delete PDF documents",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DocumentPortalError, portal_error_handler)

    app.include_router(documents.router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": VERSION}

    return app


app = create_app()
