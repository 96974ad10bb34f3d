"""
Submission Sink
===============

Posts a graded quiz result to the results endpoint (a published script URL).
The endpoint's response is never read: a successful call only means the
request was dispatched, not that the result was stored.
"""

import logging
from typing import Dict, Optional

import httpx

from config import is_placeholder
from models.portal_models import QuizSubmission
from sheets.errors import NotConfiguredError, SubmissionDeliveryError
from sheets.sheets_client import build_http_client

logger = logging.getLogger(__name__)


class SubmissionSink:
    def __init__(self, endpoint: str, client: Optional[httpx.AsyncClient] = None):
        self.endpoint = endpoint
        self.client = client or build_http_client()

    async def submit(self, submission: QuizSubmission) -> Dict[str, str]:
        if is_placeholder(self.endpoint):
            logger.error("Quiz submission URL is not configured. Cannot submit results.")
            raise NotConfiguredError("results submission")

        try:
            await self.client.post(self.endpoint, json=submission.to_payload())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Error submitting quiz results: {e}")
            raise SubmissionDeliveryError() from e

        logger.info(f"Dispatched result {submission.score} for '{submission.quiz_title}'")
        return {"status": "success"}

    async def close(self):
        await self.client.aclose()
