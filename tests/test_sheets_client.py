import asyncio
from dataclasses import replace

import httpx
import pytest

from mock_data import SETTINGS
from sheets.errors import AccessDeniedError, NetworkFailureError
from sheets.sheets_client import SheetsClient, html_page_title

SIGN_IN_PAGE = "<html><head><title>Sign in - Google Accounts</title></head><body></body></html>"


def run(coro):
    return asyncio.run(coro)


async def fetch(settings, client, method):
    sheets = SheetsClient(settings, client)
    try:
        return await getattr(sheets, method)()
    finally:
        await sheets.close()


def test_fetch_rows_sends_no_cache_headers(make_client, requests_seen):
    sheets = SheetsClient(SETTINGS, make_client())
    rows = run(sheets.fetch_rows(SETTINGS.students_url, "students"))

    assert rows[0] == ["S100", "Mona Adel", "Year 1"]
    assert requests_seen[0].headers["cache-control"] == "no-cache"
    assert requests_seen[0].headers["pragma"] == "no-cache"


def test_every_call_fetches_again(make_client, requests_seen):
    client = make_client()
    run(fetch(SETTINGS, client, "get_students"))
    run(fetch(SETTINGS, make_client(), "get_students"))
    assert len(requests_seen) == 2


def test_html_response_is_access_denied():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, text=SIGN_IN_PAGE, headers={"content-type": "text/html; charset=utf-8"})
    )
    with pytest.raises(AccessDeniedError) as info:
        run(fetch(SETTINGS, httpx.AsyncClient(transport=transport), "get_lectures"))

    assert not isinstance(info.value, NetworkFailureError)
    assert info.value.entity == "lectures"


def test_html_error_page_is_still_access_denied():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(403, text=SIGN_IN_PAGE, headers={"content-type": "text/html"})
    )
    with pytest.raises(AccessDeniedError):
        run(fetch(SETTINGS, httpx.AsyncClient(transport=transport), "get_quizzes"))


def test_bad_status_is_network_failure():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(NetworkFailureError) as info:
        run(fetch(SETTINGS, httpx.AsyncClient(transport=transport), "get_quizzes"))

    assert info.value.status_code == 500
    assert info.value.entity == "quizzes"


def test_transport_error_is_network_failure():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(NetworkFailureError) as info:
        run(fetch(SETTINGS, httpx.AsyncClient(transport=httpx.MockTransport(handler)), "get_students"))
    assert info.value.status_code is None


def test_placeholder_location_makes_no_request(make_client, requests_seen):
    settings = replace(SETTINGS, lectures_url="ADD_YOUR_LECTURES_SHEET_URL", quizzes_url="")

    assert run(fetch(settings, make_client(), "get_lectures")) == []
    assert run(fetch(settings, make_client(), "get_quizzes")) == []
    assert requests_seen == []


def test_submission_failures_yield_empty_list():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    assert run(fetch(SETTINGS, httpx.AsyncClient(transport=transport), "get_quiz_submissions")) == []

    html = httpx.MockTransport(lambda request: httpx.Response(200, text=SIGN_IN_PAGE, headers={"content-type": "text/html"}))
    assert run(fetch(SETTINGS, httpx.AsyncClient(transport=html), "get_quiz_submissions")) == []


def test_typed_records_are_returned(make_client):
    quizzes = run(fetch(SETTINGS, make_client(), "get_quizzes"))
    submissions = run(fetch(SETTINGS, make_client(), "get_quiz_submissions"))

    assert quizzes[0].title == "Quiz A"
    assert submissions[1].student_id == "s200"


def test_html_page_title():
    assert html_page_title(SIGN_IN_PAGE) == "Sign in - Google Accounts"
    assert html_page_title("<p>no title</p>") == ""


def test_malformed_location_is_network_failure():
    settings = replace(SETTINGS, lectures_url="http://[::1")
    with pytest.raises(NetworkFailureError) as info:
        run(fetch(settings, httpx.AsyncClient(), "get_lectures"))
    assert info.value.entity == "lectures"
