"""Randomized question synthesis over a game knowledge base."""

import itertools
import logging
import random

from .config import DEFAULT_QUESTION_COUNT, DIFFICULTY_DISTANCES, MIN_CATEGORY_SIZE
from .knowledge import GameKnowledgeBase
from .models import Category, Difficulty, ItemType, Question

logger = logging.getLogger(__name__)

E, M, H = Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD

# Difficulty of each question slot, in quiz order: 8 easy, 8 medium, 8 hard.
DIFFICULTY_SEQUENCE = (
    E, E, E, E, M, M, M, H,
    E, E, E, M, M, M, H, H,
    E, M, M, H, H, H, H, H,
)


def distance_range(difficulty: Difficulty) -> tuple[int, int]:
    """Inclusive index-distance range for a difficulty (unknown plays as easy)."""
    if difficulty is Difficulty.UNKNOWN:
        difficulty = Difficulty.EASY
    return DIFFICULTY_DISTANCES[difficulty]


def question_text(category: Category) -> str:
    item = "artist" if category.item_type is ItemType.ARTIST else "track"
    return f"To which <b>{item}</b> have you listened more {category.period.description}?"


class QuestionGenerator:
    """Builds a quiz of "which did you listen to more" questions.

    Every random draw goes through `rng`, so a seeded `random.Random` yields
    the same quiz for the same knowledge base.
    """

    def __init__(self, rng: random.Random | None = None, question_count: int = DEFAULT_QUESTION_COUNT) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.question_count = question_count

    def generate_questions(self, game_kb: GameKnowledgeBase, count: int | None = None) -> list[Question] | None:
        """Generate up to `count` questions, or None when no quiz can be built.

        Each category gets an equal quota of floor(count / categories); the
        remainder is dropped, so fewer than `count` questions is a normal result.
        """
        count = self.question_count if count is None else count
        categories = game_kb.categories()
        if not categories:
            logger.warning("No categories selected; cannot build a quiz.")
            return None

        for category in categories:
            size = game_kb.get_category_size(category)
            if size < MIN_CATEGORY_SIZE:
                logger.warning(
                    "Category %s has %d items, need at least %d.",
                    category,
                    max(size, 0),
                    MIN_CATEGORY_SIZE,
                )
                return None

        quotas = [count // len(categories)] * len(categories)
        questions: list[Question] = []

        for difficulty in itertools.islice(itertools.cycle(DIFFICULTY_SEQUENCE), count):
            c = self._next_category(quotas)
            if c < 0:
                break
            questions.append(self.generate_question(categories[c], difficulty, game_kb))

        logger.debug("Generated %d questions over %d categories", len(questions), len(categories))
        return questions

    def generate_question(self, category: Category, difficulty: Difficulty, game_kb: GameKnowledgeBase) -> Question:
        low, high = distance_range(difficulty)
        left, right = self._index_pair(game_kb.get_category_size(category), low, high)

        return Question(
            category=category,
            difficulty=difficulty,
            i_left=left,
            i_right=right,
            # Lower index means listened to more.
            answer=min(left, right),
            text=question_text(category),
        )

    def _next_category(self, quotas: list[int]) -> int:
        """Pick a random category with quota left and consume one slot of it."""
        available = [i for i, left in enumerate(quotas) if left > 0]
        if not available:
            return -1

        c = self.rng.choice(available)
        quotas[c] -= 1
        return c

    def _index_pair(self, size: int, low: int, high: int) -> tuple[int, int]:
        if size <= low:
            raise ValueError(f"Category of size {size} cannot host distance {low}")

        while True:
            left = self.rng.randint(0, size - 1)
            distance = self.rng.randint(low, high)
            sign = self.rng.choice((-1, 1))

            right = left + sign * distance
            if not 0 <= right < size:
                right = left - sign * distance

            if 0 <= right < size:
                return left, right
