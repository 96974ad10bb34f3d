"""
Data Models for the Study Portal
================================

This module defines the records built from the spreadsheet exports and passed
between the data layer, the quiz session and the dashboard. All models are
implemented as dataclasses.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

VIDEO_LINK_TYPE = "فيديو"
VIDEO_TAGS = {VIDEO_LINK_TYPE, "video"}


@dataclass
class Student:
    user_id: str
    student_name: str
    academic_year: str


@dataclass
class Lecture:
    lecture_name: str
    lecture_link: str
    academic_year: str
    link_type: str = VIDEO_LINK_TYPE
    thumbnail_url: Optional[str] = None
    subject: Optional[str] = None

    @property
    def is_video(self) -> bool:
        return self.link_type.lower().strip() in VIDEO_TAGS


@dataclass
class Question:
    question_text: str
    options: List[str] = field(default_factory=list)
    correct_answer: str = ""


@dataclass
class Quiz:
    id: str
    title: str
    academic_year: str
    questions: List[Question] = field(default_factory=list)


@dataclass
class QuizSubmission:
    student_id: str
    student_name: str
    quiz_title: str
    score: str  # e.g. "8/10"

    def to_payload(self) -> Dict[str, str]:
        """JSON body expected by the results endpoint."""
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "quizTitle": self.quiz_title,
            "score": self.score,
        }


@dataclass
class DashboardData:
    lectures: List[Lecture] = field(default_factory=list)
    quizzes: List[Quiz] = field(default_factory=list)
    submissions: List[QuizSubmission] = field(default_factory=list)
