"""Core game loop: question rounds, scoring, and the end-of-game rating."""

import logging
import random

from .configurator import GameConfigurator
from .models import GameConfiguration
from .questions import QuestionGenerator
from .session import GameSession
from .ui import choice_prompt, render_question_screen

logger = logging.getLogger(__name__)

NOT_ENOUGH_HISTORY = "Not enough Spotify history to play :("
FETCH_FAILED = "Failed to retrieve data from Spotify."


def prepare_session(
    configurator: GameConfigurator,
    config: GameConfiguration,
    question_count: int,
    rng: random.Random | None = None,
) -> GameSession:
    """Fetch knowledge for a configuration and build a ready-to-play session."""
    if not configurator.configure_game(config):
        raise RuntimeError(FETCH_FAILED)

    game_kb = configurator.get_game_knowledge_base()
    questions = QuestionGenerator(rng=rng).generate_questions(game_kb, count=question_count)
    if not questions:
        raise RuntimeError(NOT_ENOUGH_HISTORY)

    session = GameSession()
    session.set_knowledge_base(game_kb)
    session.set_questions(questions)
    session.restart()
    return session


def play_game(session: GameSession) -> str:
    """Run one pass over the session's quiz; returns how the run ended."""
    session.restart()
    status = "finished"

    while not session.is_game_over():
        question = session.next_question()
        if question is None:
            break

        render_question_screen(
            question=question,
            question_number=session.get_question_number(),
            question_count=session.get_number_of_questions(),
            score=session.get_score(),
            lives=session.get_lives(),
        )

        choice, choice_status = choice_prompt()
        if choice_status == "quit":
            status = "quit"
            break

        picked = question.i_left if choice == 0 else question.i_right
        if session.answer_question(picked):
            print("Correct!")
        else:
            side = question.left_text if question.answer == question.i_left else question.right_text
            print(f"Wrong. The answer was: {side.track or side.artist}")

    if status == "quit":
        print("Game ended by user.")
        return status

    print("\nGame Over")
    print(f"Final score: {session.get_score()}/{session.get_number_of_questions()}")
    print(f"Lives left: {session.get_lives()}")
    print(f'"{session.get_rating_quote()}"')
    logger.debug("Rating image: %s", session.get_rating_image())

    track_ids = session.get_playlist_track_ids()
    if track_ids:
        print(f"{len(track_ids)} tracks from this quiz are available for a playlist.")
    return status
