import httpx
import pytest

from mock_data import SHEETS_BY_PATH, csv_response


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def sheets_transport(requests_seen):
    """Serves the sample exports; any other path answers 404."""
    def handler(request):
        requests_seen.append(request)
        text = SHEETS_BY_PATH.get(request.url.path)
        if text is None:
            return csv_response("not found", status_code=404)
        return csv_response(text)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_client(sheets_transport):
    def factory(transport=None):
        return httpx.AsyncClient(transport=transport or sheets_transport)
    return factory
