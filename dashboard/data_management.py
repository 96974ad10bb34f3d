"""
Data Management
===============

Async glue between the Streamlit pages and the sheet client: login lookup,
the concurrent dashboard load, refreshing results and delivering a graded
quiz. The *_sync wrappers are what the pages call.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

import httpx

from analytics.metrics import for_academic_year, submissions_for_student
from config import PortalSettings
from models.portal_models import DashboardData, QuizSubmission, Student
from quiz.session import QuizSession
from sheets.errors import UnknownCodeError
from sheets.sheets_client import SheetsClient
from sheets.submission_sink import SubmissionSink

logger = logging.getLogger(__name__)


def find_student(students: Sequence[Student], code: str) -> Student:
    """Looks up a learner by code, ignoring case and surrounding spaces."""
    code = (code or "").strip()
    if not code:
        raise UnknownCodeError()

    wanted = code.lower()
    student = next((s for s in students if s.user_id.lower() == wanted), None)
    if student is None:
        logger.info(f"Login rejected for code {code!r}")
        raise UnknownCodeError(code)

    logger.info(f"{student.user_id} logged in ({student.academic_year})")
    return student


async def authenticate(settings: PortalSettings, code: str,
                       client: Optional[httpx.AsyncClient] = None) -> Student:
    sheets = SheetsClient(settings, client)
    try:
        students = await sheets.get_students()
    finally:
        await sheets.close()
    return find_student(students, code)


async def load_dashboard(settings: PortalSettings, student: Student,
                         client: Optional[httpx.AsyncClient] = None) -> DashboardData:
    """
    Fetches lectures, quizzes and results in parallel and scopes them to the
    learner. Lecture or quiz failures propagate; results never do.
    """
    sheets = SheetsClient(settings, client)
    try:
        results = await asyncio.gather(
            sheets.get_lectures(),
            sheets.get_quizzes(),
            sheets.get_quiz_submissions(),
            return_exceptions=True,
        )
    finally:
        await sheets.close()

    # All three fetches settle before the first failure is reported.
    for result in results:
        if isinstance(result, BaseException):
            raise result
    lectures, quizzes, submissions = results

    return DashboardData(
        lectures=for_academic_year(lectures, student.academic_year),
        quizzes=for_academic_year(quizzes, student.academic_year),
        submissions=submissions_for_student(submissions, student.user_id),
    )


async def refresh_submissions(settings: PortalSettings, student: Student,
                              client: Optional[httpx.AsyncClient] = None) -> List[QuizSubmission]:
    sheets = SheetsClient(settings, client)
    try:
        submissions = await sheets.get_quiz_submissions()
    finally:
        await sheets.close()
    return submissions_for_student(submissions, student.user_id)


async def deliver_result(settings: PortalSettings, session: QuizSession,
                         client: Optional[httpx.AsyncClient] = None):
    sink = SubmissionSink(settings.submission_endpoint, client)
    try:
        await session.deliver(sink)
    finally:
        await sink.close()


def authenticate_sync(settings, code):
    return asyncio.run(authenticate(settings, code))


def load_dashboard_sync(settings, student):
    return asyncio.run(load_dashboard(settings, student))


def refresh_submissions_sync(settings, student):
    return asyncio.run(refresh_submissions(settings, student))


def deliver_result_sync(settings, session):
    asyncio.run(deliver_result(settings, session))
