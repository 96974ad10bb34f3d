"""
Dataset Mapper Module
=====================

Maps positional CSV rows onto the portal models. Column order in each sheet is
fixed, so every dataset has an explicit RowLayout. Rows missing optional
trailing columns are padded; rows missing a required column are skipped with a
warning instead of producing half-filled records.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from models.portal_models import (
    VIDEO_LINK_TYPE, Lecture, Question, Quiz, QuizSubmission, Student
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowLayout:
    dataset: str
    columns: Tuple[str, ...]
    required: int

    def conform(self, rows: List[List[str]]) -> Iterator[Dict[str, str]]:
        """Yields one column-name -> value dict per usable row."""
        width = len(self.columns)
        for number, row in enumerate(rows, start=1):
            if len(row) < self.required:
                logger.warning(
                    f"Skipping {self.dataset} row {number}: expected at least "
                    f"{self.required} columns, got {len(row)}"
                )
                continue
            padded = list(row[:width]) + [""] * (width - len(row))
            yield dict(zip(self.columns, padded))


STUDENT_LAYOUT = RowLayout(
    "students",
    ("code", "name", "academic_year"),
    required=3,
)

LECTURE_LAYOUT = RowLayout(
    "lectures",
    ("name", "link", "academic_year", "link_type", "thumbnail", "subject"),
    required=3,
)

QUIZ_LAYOUT = RowLayout(
    "quizzes",
    ("academic_year", "correct_answer", "option_1", "option_2", "option_3",
     "option_4", "question_text", "quiz_title", "quiz_id"),
    required=9,
)

SUBMISSION_LAYOUT = RowLayout(
    "submissions",
    ("timestamp", "student_id", "student_name", "quiz_title", "score"),
    required=5,
)


def map_students(rows: List[List[str]]) -> List[Student]:
    return [
        Student(user_id=r["code"], student_name=r["name"], academic_year=r["academic_year"])
        for r in STUDENT_LAYOUT.conform(rows)
    ]


def map_lectures(rows: List[List[str]]) -> List[Lecture]:
    return [
        Lecture(
            lecture_name=r["name"],
            lecture_link=r["link"],
            academic_year=r["academic_year"],
            link_type=r["link_type"] or VIDEO_LINK_TYPE,
            thumbnail_url=r["thumbnail"] or None,
            subject=r["subject"] or None,
        )
        for r in LECTURE_LAYOUT.conform(rows)
    ]


def map_quizzes(rows: List[List[str]]) -> List[Quiz]:
    """
    Groups flat question rows into quizzes by quiz id.
    The first row of an id fixes the quiz title and academic year; every row
    contributes one question, in source order.
    """
    quizzes: Dict[str, Quiz] = {}

    for r in QUIZ_LAYOUT.conform(rows):
        options = [r[f"option_{n}"] for n in range(1, 5)]
        question = Question(
            question_text=r["question_text"],
            options=[option for option in options if option],
            correct_answer=r["correct_answer"],
        )

        quiz = quizzes.get(r["quiz_id"])
        if quiz is None:
            quiz = Quiz(id=r["quiz_id"], title=r["quiz_title"], academic_year=r["academic_year"])
            quizzes[quiz.id] = quiz
        quiz.questions.append(question)

    return list(quizzes.values())


def map_submissions(rows: List[List[str]]) -> List[QuizSubmission]:
    return [
        QuizSubmission(
            student_id=r["student_id"],
            student_name=r["student_name"],
            quiz_title=r["quiz_title"],
            score=r["score"],
        )
        for r in SUBMISSION_LAYOUT.conform(rows)
    ]
