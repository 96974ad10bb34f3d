"""
Quiz Session
============

State of one attempt at a quiz: which question is shown, what the learner
picked, and the grading/delivery outcome.

IN_PROGRESS -> GRADED happens exactly once, on submit(). Option order is
shuffled once per question when the session starts, so coming back to a
question shows the options in the order the learner first saw.
"""

import logging
import random
from enum import Enum
from typing import Dict, List, Optional

from models.portal_models import Question, Quiz, QuizSubmission, Student
from sheets.errors import PortalError, QuizStateError

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IN_PROGRESS = "in_progress"
    GRADED = "graded"


class DeliveryStatus(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def shuffle_options(options: List[str], rng: random.Random) -> List[str]:
    """Fisher-Yates shuffle on a copy of the options."""
    shuffled = list(options)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class QuizSession:
    def __init__(self, quiz: Quiz, student: Student, rng: Optional[random.Random] = None):
        self.quiz = quiz
        self.student = student
        self.state = SessionState.IN_PROGRESS
        self.current_index = 0
        self.selected_answers: Dict[int, str] = {}

        rng = rng or random.Random()
        self._shuffled_options = [shuffle_options(q.options, rng) for q in quiz.questions]

        self.score: Optional[int] = None
        self.submission: Optional[QuizSubmission] = None
        self.delivery_status: Optional[DeliveryStatus] = None
        self.delivery_error: Optional[str] = None

    @property
    def question_count(self) -> int:
        return len(self.quiz.questions)

    @property
    def total(self) -> int:
        return self.question_count

    @property
    def is_graded(self) -> bool:
        return self.state is SessionState.GRADED

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index >= self.question_count - 1

    @property
    def current_question(self) -> Optional[Question]:
        if not self.quiz.questions:
            return None
        return self.quiz.questions[self.current_index]

    def shuffled_options(self, index: Optional[int] = None) -> List[str]:
        index = self.current_index if index is None else index
        if not self._shuffled_options:
            return []
        return list(self._shuffled_options[index])

    def selected_answer(self, index: Optional[int] = None) -> Optional[str]:
        index = self.current_index if index is None else index
        return self.selected_answers.get(index)

    def _require_in_progress(self, action: str):
        if self.state is not SessionState.IN_PROGRESS:
            raise QuizStateError(f"Cannot {action}: quiz '{self.quiz.title}' is already graded.")

    def select_answer(self, index: int, answer: str):
        self._require_in_progress("select an answer")
        self.selected_answers[index] = answer

    def answer_current(self, answer: str):
        self.select_answer(self.current_index, answer)

    def next(self):
        if self.current_index < self.question_count - 1:
            self.current_index += 1

    def prev(self):
        if self.current_index > 0:
            self.current_index -= 1

    def submit(self) -> QuizSubmission:
        """Grades the attempt and builds the result to deliver."""
        self._require_in_progress("submit")

        correct = 0
        for index, question in enumerate(self.quiz.questions):
            if self.selected_answers.get(index) == question.correct_answer:
                correct += 1

        self.score = correct
        self.state = SessionState.GRADED
        self.submission = QuizSubmission(
            student_id=self.student.user_id,
            student_name=self.student.student_name,
            quiz_title=self.quiz.title,
            score=f"{correct}/{self.total}",
        )
        self.delivery_status = DeliveryStatus.PENDING
        logger.info(f"{self.student.user_id} finished '{self.quiz.title}' with {self.submission.score}")
        return self.submission

    async def deliver(self, sink):
        """
        Hands the graded result to the sink once. A failed delivery is kept as
        the session outcome; grading stays as it is.
        """
        if self.delivery_status is not DeliveryStatus.PENDING:
            raise QuizStateError("Nothing to deliver: the quiz is not graded or was already sent.")

        try:
            await sink.submit(self.submission)
        except PortalError as e:
            self.delivery_status = DeliveryStatus.FAILED
            self.delivery_error = str(e)
            return
        self.delivery_status = DeliveryStatus.SUCCEEDED
