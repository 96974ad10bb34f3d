"""
SheetsClient Module (Async Version)
===================================
Fetches the published sheet exports with httpx.AsyncClient and maps them onto
portal models. Callers run several fetches concurrently with asyncio.gather.
"""

import logging
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup

from config import PortalSettings, is_placeholder
from models.portal_models import Lecture, Quiz, QuizSubmission, Student
from sheets.csv_parser import parse_csv
from sheets.dataset_mapper import map_lectures, map_quizzes, map_students, map_submissions
from sheets.errors import AccessDeniedError, NetworkFailureError, PortalError

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def build_http_client() -> httpx.AsyncClient:
    # Sheet exports answer with a redirect to the content host.
    return httpx.AsyncClient(
        headers={
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
        },
        follow_redirects=True,
        timeout=60.0
    )


def html_page_title(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return ""


class SheetsClient:
    def __init__(self, settings: PortalSettings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.client = client or build_http_client()

    async def fetch_rows(self, url: str, entity: str) -> List[List[str]]:
        """
        Downloads one sheet export and returns its data rows.
        A placeholder location yields no rows and makes no request.
        """
        if is_placeholder(url):
            logger.warning(f"{entity} URL is not configured.")
            return []

        try:
            resp = await self.client.get(url, headers=NO_CACHE_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkFailureError(entity) from e

        # A sheet that is not shared publicly answers with a sign-in page.
        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            logger.error(f"{entity} sheet returned an HTML page: {html_page_title(resp.text)!r}")
            raise AccessDeniedError(entity)

        if not resp.is_success:
            raise NetworkFailureError(entity, resp.status_code)

        return parse_csv(resp.text)

    async def get_students(self) -> List[Student]:
        try:
            rows = await self.fetch_rows(self.settings.students_url, "students")
        except PortalError as e:
            logger.error(f"Error fetching students: {e}")
            raise
        return map_students(rows)

    async def get_lectures(self) -> List[Lecture]:
        try:
            rows = await self.fetch_rows(self.settings.lectures_url, "lectures")
        except PortalError as e:
            logger.error(f"Error fetching lectures: {e}")
            raise
        return map_lectures(rows)

    async def get_quizzes(self) -> List[Quiz]:
        try:
            rows = await self.fetch_rows(self.settings.quizzes_url, "quizzes")
        except PortalError as e:
            logger.error(f"Error fetching quizzes: {e}")
            raise
        return map_quizzes(rows)

    async def get_quiz_submissions(self) -> List[QuizSubmission]:
        """
        Fetches past quiz results. Failures are logged and yield an empty list:
        missing history must not stop a learner from taking a quiz.
        """
        try:
            rows = await self.fetch_rows(self.settings.submissions_url, "quiz results")
        except PortalError as e:
            logger.error(f"Error fetching quiz submissions: {e}")
            return []
        return map_submissions(rows)

    async def close(self):
        """Closes the async client session."""
        await self.client.aclose()
