"""
Dashboard Views and Results Metrics
===================================

This module derives what the dashboard shows from the fetched collections:
learner scoping, subject filtering, quiz completion lookups and a results
table.
"""

from typing import List, Optional, Sequence, Tuple, TypeVar

import pandas as pd

from models.portal_models import Lecture, Quiz, QuizSubmission

ALL_SUBJECTS = "All"

T = TypeVar("T", Lecture, Quiz)

RESULT_COLUMNS = ["Quiz", "Questions", "Score", "Correct", "Total", "Percent", "Completed"]


def for_academic_year(items: Sequence[T], academic_year: str) -> List[T]:
    return [item for item in items if item.academic_year == academic_year]


def submissions_for_student(submissions: Sequence[QuizSubmission], user_id: str) -> List[QuizSubmission]:
    return [s for s in submissions if s.student_id == user_id]


def subject_options(lectures: Sequence[Lecture]) -> List[str]:
    """ALL_SUBJECTS followed by every distinct subject, in first-seen order."""
    if not lectures:
        return []
    subjects = dict.fromkeys(lecture.subject for lecture in lectures if lecture.subject)
    return [ALL_SUBJECTS, *subjects]


def filter_by_subject(lectures: Sequence[Lecture], subject: str) -> List[Lecture]:
    if subject == ALL_SUBJECTS:
        return list(lectures)
    return [lecture for lecture in lectures if lecture.subject == subject]


def find_submission(submissions: Sequence[QuizSubmission], quiz: Quiz) -> Optional[QuizSubmission]:
    # Results are joined to quizzes by title.
    return next((s for s in submissions if s.quiz_title == quiz.title), None)


def parse_score(score: str) -> Optional[Tuple[int, int]]:
    """Parses "8/10" into (8, 10)."""
    try:
        correct, total = score.split("/")
        return int(correct), int(total)
    except (AttributeError, ValueError):
        return None


def results_frame(quizzes: Sequence[Quiz], submissions: Sequence[QuizSubmission]) -> pd.DataFrame:
    """
    One row per quiz with the learner's recorded score, if any.
    Percent is left empty for quizzes without a readable score.
    """
    rows = []
    for quiz in quizzes:
        submission = find_submission(submissions, quiz)
        parsed = parse_score(submission.score) if submission else None
        correct, total = parsed if parsed else (None, None)
        rows.append({
            "Quiz": quiz.title,
            "Questions": len(quiz.questions),
            "Score": submission.score if submission else "",
            "Correct": correct,
            "Total": total,
            "Percent": round(correct / total * 100, 1) if parsed and total else None,
            "Completed": submission is not None,
        })

    return pd.DataFrame(rows, columns=RESULT_COLUMNS)
