"""
Portal Configuration
====================

Sheet export locations and the results endpoint, read from the environment.
Unset variables keep a placeholder containing PLACEHOLDER_MARKER, which the
fetch client and the submission sink treat as "not configured yet".
"""

import os
from dataclasses import dataclass

PLACEHOLDER_MARKER = "ADD_YOUR"


def is_placeholder(location: str) -> bool:
    return not location or PLACEHOLDER_MARKER in location


@dataclass(frozen=True)
class PortalSettings:
    students_url: str
    lectures_url: str
    quizzes_url: str
    submissions_url: str
    submission_endpoint: str


def load_settings() -> PortalSettings:
    """Builds settings from PORTAL_* environment variables."""
    return PortalSettings(
        students_url=os.getenv("PORTAL_STUDENTS_URL", "ADD_YOUR_STUDENTS_SHEET_URL"),
        lectures_url=os.getenv("PORTAL_LECTURES_URL", "ADD_YOUR_LECTURES_SHEET_URL"),
        quizzes_url=os.getenv("PORTAL_QUIZZES_URL", "ADD_YOUR_QUIZZES_SHEET_URL"),
        submissions_url=os.getenv("PORTAL_SUBMISSIONS_URL", "ADD_YOUR_RESULTS_SHEET_URL"),
        submission_endpoint=os.getenv("PORTAL_SUBMISSION_ENDPOINT", "ADD_YOUR_SCRIPT_URL"),
    )
