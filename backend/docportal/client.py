"""HTTP client for the document portal API.

Callers can tell "the service is down" (``ServiceUnavailableError``) apart
from "the service refused the request" (``NotFoundError``,
``ValidationError``, ``RemoteError``), e.g. to keep selected files in local
unsaved state until the server is back.
"""

import builtins
import logging
from collections.abc import Iterable
from pathlib import Path

import httpx

from docportal.exceptions import NotFoundError, RemoteError, ServiceUnavailableError, ValidationError
from docportal.schemas.document import DocumentSummary, UploadResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class DocumentClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: httpx.Client | None = None,
        timeout: float = 30.0,
    ):
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> "DocumentClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._owns_http:
            self._http.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("Cannot connect to document service: %s", exc)
            raise ServiceUnavailableError(f"Cannot connect to document service: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError(response.text or None)
        if response.status_code == 400:
            raise ValidationError(response.text or None)
        if response.is_error:
            raise RemoteError(response.status_code, response.text or None)
        return response

    def upload(self, files: Iterable[Path | tuple[str, bytes]]) -> UploadResponse:
        """Upload several files in one request.

        Each item is either a path on disk or a ``(filename, content)`` pair.
        """
        parts = []
        for item in files:
            if isinstance(item, Path):
                name, content = item.name, item.read_bytes()
            else:
                name, content = item
            parts.append(("file", (name, content, "application/pdf")))
        if not parts:
            raise ValidationError("Please select at least one PDF")

        response = self._request("POST", "/documents/upload", files=parts)
        return UploadResponse.model_validate(response.json())

    def download(self, doc_id: int) -> bytes:
        return self._request("GET", f"/documents/{doc_id}").content

    def delete(self, doc_id: int) -> str:
        return self._request("DELETE", f"/documents/{doc_id}").json()["message"]

    def list(self) -> builtins.list[DocumentSummary]:
        response = self._request("GET", "/documents/upload")
        return [DocumentSummary.model_validate(d) for d in response.json()]
