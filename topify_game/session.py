"""Game session state: cursor, lives, score and end-of-game rating."""

import logging
from enum import Enum

from .config import MAX_LIVES, RATING_IMAGES, RATING_QUOTES
from .display import project_question
from .knowledge import GameKnowledgeBase
from .models import DisplayableQuestion, ItemType, Question

logger = logging.getLogger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


def determine_rating(score: int, lives: int, max_lives: int = MAX_LIVES) -> int:
    """Map a final score to one of six rating tiers (0 worst, 5 best)."""
    if score <= 4:
        return 0
    if score <= 9:
        return 1
    if score <= 14:
        return 2
    if score <= 19:
        return 3
    if score <= 25 and lives < max_lives:
        return 4
    return 5


class GameSession:
    """One playable quiz: owns the questions and the knowledge they index.

    `restart()` rewinds the same quiz without regenerating questions, so a
    session can be replayed as often as needed.
    """

    def __init__(self, max_lives: int = MAX_LIVES) -> None:
        self.max_lives = max_lives
        self.knowledge_base: GameKnowledgeBase | None = None
        self.questions: list[Question] | None = None
        self.at_question = -1
        self.lives = max_lives
        self.score = 0
        self.rating: int | None = None

    def set_knowledge_base(self, game_kb: GameKnowledgeBase) -> None:
        self.knowledge_base = game_kb

    def set_questions(self, questions: list[Question]) -> None:
        self.questions = list(questions)

    def is_ready(self) -> bool:
        return self.knowledge_base is not None and bool(self.questions)

    @property
    def state(self) -> SessionState:
        if not self.is_ready():
            return SessionState.UNINITIALIZED
        if self.at_question < 0:
            return SessionState.READY
        if self.is_game_over():
            return SessionState.GAME_OVER
        return SessionState.IN_PROGRESS

    def get_number_of_questions(self) -> int:
        return len(self.questions) if self.questions else 0

    def get_question_number(self) -> int:
        return self.at_question + 1

    def next_question(self) -> DisplayableQuestion | None:
        """Advance to the next question; None when there is none left."""
        if not self.is_ready() or self.at_question >= self.get_number_of_questions() - 1:
            return None

        self.at_question += 1
        return project_question(self.questions[self.at_question], self.knowledge_base)

    def current_question(self) -> Question | None:
        if not self.questions or not 0 <= self.at_question < len(self.questions):
            return None
        return self.questions[self.at_question]

    def answer_question(self, answer: int) -> bool:
        """Score an answer to the current question without advancing."""
        question = self.current_question()
        if question is None:
            raise RuntimeError("No question has been asked yet.")

        correct = answer == question.answer
        if correct:
            self.score += 1
        else:
            self.lives -= 1

        logger.debug(
            "Question %d answered %s (score=%d, lives=%d)",
            self.get_question_number(),
            "correctly" if correct else "wrongly",
            self.score,
            self.lives,
        )
        return correct

    def is_game_over(self) -> bool:
        if not self.is_ready():
            return False
        return self.lives <= 0 or self.at_question == self.get_number_of_questions() - 1

    def restart(self) -> None:
        self.at_question = -1
        self.lives = self.max_lives
        self.score = 0
        self.rating = None

    def get_lives(self) -> int:
        return self.lives

    def get_score(self) -> int:
        return self.score

    def get_rating(self) -> int | None:
        """Rating tier of a finished game, computed once and cached."""
        if not self.is_game_over():
            return None

        if self.rating is None:
            self.rating = determine_rating(self.score, self.lives, self.max_lives)
        return self.rating

    def get_rating_quote(self) -> str | None:
        rating = self.get_rating()
        return None if rating is None else RATING_QUOTES[rating]

    def get_rating_image(self) -> str | None:
        rating = self.get_rating()
        return None if rating is None else RATING_IMAGES[rating]

    def get_playlist_track_ids(self) -> list[str]:
        """Ordered, de-duplicated ids of the tracks this quiz asked about."""
        if not self.is_ready():
            return []

        seen_ids: set[str] = set()
        track_ids: list[str] = []
        for question in self.questions:
            if question.category.item_type is not ItemType.TRACK:
                continue

            for index in (question.i_left, question.i_right):
                track = self.knowledge_base.get_track(question.category.period, index)
                if track is None or track.id in seen_ids:
                    continue
                seen_ids.add(track.id)
                track_ids.append(track.id)

        return track_ids
