from fastapi import Request

from docportal.services.document_store import DocumentStore


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store
