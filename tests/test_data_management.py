import asyncio
import json
from dataclasses import replace

import httpx
import pytest

from dashboard.data_management import (
    authenticate, deliver_result, find_student, load_dashboard, refresh_submissions
)
from mock_data import SETTINGS, SHEETS_BY_PATH, csv_response
from models.portal_models import Question, Quiz, Student
from quiz.session import DeliveryStatus, QuizSession
from sheets.errors import AccessDeniedError, NetworkFailureError, SubmissionDeliveryError, UnknownCodeError

MONA = Student(user_id="S100", student_name="Mona Adel", academic_year="Year 1")


def make_geography_quiz():
    return Quiz(id="G1", title="Geography", academic_year="Year 1", questions=[
        Question(question_text="Capital of France?", options=["Paris", "Rome"], correct_answer="Paris"),
        Question(question_text="Longest river?", options=["Nile", "Amazon"], correct_answer="Nile"),
    ])


def test_code_lookup_is_case_insensitive():
    students = [MONA]
    assert find_student(students, "s100") is MONA
    assert find_student(students, "  S100 ") is MONA


def test_unknown_and_blank_codes():
    with pytest.raises(UnknownCodeError) as info:
        find_student([MONA], "S999")
    assert info.value.code == "S999"

    with pytest.raises(UnknownCodeError):
        find_student([MONA], "   ")


def test_authenticate_against_roster(make_client):
    student = asyncio.run(authenticate(SETTINGS, "S200", make_client()))
    assert student.user_id == "s200"
    assert student.academic_year == "Year 2"


def test_dashboard_is_scoped_to_student(make_client):
    data = asyncio.run(load_dashboard(SETTINGS, MONA, make_client()))

    assert [l.lecture_name for l in data.lectures] == ["Intro video", "Cells notes", "Atoms, part 1"]
    assert [q.id for q in data.quizzes] == ["G1", "M1"]
    assert [s.quiz_title for s in data.submissions] == ["Geography"]


def test_dashboard_survives_missing_results():
    def handler(request):
        if request.url.path == "/results.csv":
            return httpx.Response(503)
        return csv_response(SHEETS_BY_PATH[request.url.path])

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    data = asyncio.run(load_dashboard(SETTINGS, MONA, client))

    assert data.submissions == []
    assert len(data.quizzes) == 2


def test_dashboard_fails_when_quizzes_fail():
    def handler(request):
        if request.url.path == "/quizzes.csv":
            return httpx.Response(200, text="<html></html>", headers={"content-type": "text/html"})
        return csv_response(SHEETS_BY_PATH[request.url.path])

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    with pytest.raises(AccessDeniedError):
        asyncio.run(load_dashboard(SETTINGS, MONA, client))


def test_refresh_submissions(make_client):
    subs = asyncio.run(refresh_submissions(SETTINGS, MONA, make_client()))
    assert [s.score for s in subs] == ["1/2"]


def test_take_quiz_end_to_end(make_client):
    posted = []

    def handler(request):
        posted.append(json.loads(request.content))
        return httpx.Response(200, text="ok")

    data = asyncio.run(load_dashboard(SETTINGS, MONA, make_client()))
    geography = data.quizzes[0]
    session = QuizSession(geography, MONA)
    session.select_answer(0, "Paris")
    session.select_answer(1, "Amazon")
    session.submit()

    asyncio.run(deliver_result(SETTINGS, session, httpx.AsyncClient(transport=httpx.MockTransport(handler))))

    assert session.delivery_status is DeliveryStatus.SUCCEEDED
    assert posted == [{"studentId": "S100", "studentName": "Mona Adel", "quizTitle": "Geography", "score": "1/2"}]


def test_unconfigured_endpoint_fails_delivery_only(make_client):
    settings = replace(SETTINGS, submission_endpoint="ADD_YOUR_SCRIPT_URL")
    data = asyncio.run(load_dashboard(SETTINGS, MONA, make_client()))
    quiz_session = QuizSession(data.quizzes[1], MONA)
    quiz_session.answer_current("4")
    quiz_session.submit()

    asyncio.run(deliver_result(settings, quiz_session))

    assert quiz_session.score == 1
    assert quiz_session.delivery_status is DeliveryStatus.FAILED
    assert "not configured" in quiz_session.delivery_error


def test_malformed_endpoint_fails_delivery_only():
    settings = replace(SETTINGS, submission_endpoint="http://[::1")
    session = QuizSession(make_geography_quiz(), MONA)
    session.select_answer(0, "Paris")
    session.submit()

    asyncio.run(deliver_result(settings, session))

    assert session.score == 1
    assert session.delivery_status is DeliveryStatus.FAILED
    assert session.delivery_error == str(SubmissionDeliveryError())


def test_malformed_lectures_location_fails_dashboard(make_client):
    settings = replace(SETTINGS, lectures_url="http://[::1")
    with pytest.raises(NetworkFailureError):
        asyncio.run(load_dashboard(settings, MONA, make_client()))
