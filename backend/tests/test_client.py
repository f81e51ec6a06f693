import typing

import httpx
import pytest

from docportal.client import DocumentClient
from docportal.exceptions import NotFoundError, RemoteError, ServiceUnavailableError, ValidationError
from docportal.schemas.document import DocumentSummary


def _mock_http(handler):
    return httpx.Client(transport=httpx.MockTransport(handler), base_url="http://localhost:5000")


class TestDocumentClient:
    def test_round_trip_against_app(self, client):
        api = DocumentClient(http=client)

        result = api.upload([("report.pdf", b"r" * 1024), ("scan.pdf", b"s" * 2048)])
        assert [d.filename for d in result.documents] == ["report.pdf", "scan.pdf"]
        assert result.failed == []

        listed = api.list()
        assert [d.filename for d in listed] == ["scan.pdf", "report.pdf"]

        report_id = result.documents[0].id
        assert api.download(report_id) == b"r" * 1024
        assert api.delete(report_id) == "Document deleted"

        with pytest.raises(NotFoundError):
            api.download(report_id)
        with pytest.raises(NotFoundError):
            api.delete(report_id)

    def test_upload_paths(self, client, tmp_path):
        pdf = tmp_path / "invoice.pdf"
        pdf.write_bytes(b"%PDF-1.4 invoice")

        result = DocumentClient(http=client).upload([pdf])
        assert result.documents[0].filename == "invoice.pdf"
        assert result.documents[0].filesize == len(b"%PDF-1.4 invoice")

    def test_upload_requires_files(self):
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(ValidationError):
            DocumentClient(http=_mock_http(handler)).upload([])

    def test_unreachable_service(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        api = DocumentClient(http=_mock_http(handler))
        with pytest.raises(ServiceUnavailableError):
            api.list()

    def test_server_error(self):
        def handler(request):
            return httpx.Response(500, text="database is locked")

        api = DocumentClient(http=_mock_http(handler))
        with pytest.raises(RemoteError) as exc_info:
            api.list()
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "database is locked"

    def test_close_leaves_injected_client_open(self):
        http = _mock_http(lambda request: httpx.Response(200, json=[]))
        with DocumentClient(http=http) as api:
            assert api.list() == []
        assert not http.is_closed
        http.close()

    def test_list_annotation_is_the_builtin(self):
        hints = typing.get_type_hints(DocumentClient.list)
        assert hints["return"] == list[DocumentSummary]
