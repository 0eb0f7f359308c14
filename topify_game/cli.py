"""CLI entrypoint and high-level application orchestration."""

import argparse
import logging
import random

from .chart import show_chart
from .config import DEFAULT_QUESTION_COUNT
from .configurator import GameConfigurator
from .env import get_required_env, load_env_file
from .game import play_game, prepare_session
from .knowledge import KnowledgeBase
from .models import Category, GameConfiguration, ItemType, Period
from .spotify_client import SpotifyKnowledgeSource, close_sessions, create_spotify_client
from .ui import prompt_play_again


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI options selecting quiz categories or the chart view."""
    parser = argparse.ArgumentParser(description="Quiz yourself on your Spotify listening history")
    parser.add_argument(
        "--questions",
        type=int,
        default=DEFAULT_QUESTION_COUNT,
        help="Number of questions to generate (default: 24).",
    )
    parser.add_argument("--no-artists", action="store_true", help="Leave top artists out of the quiz.")
    parser.add_argument("--no-tracks", action="store_true", help="Leave top tracks out of the quiz.")
    parser.add_argument("--no-short-term", action="store_true", help="Skip the last 4 weeks.")
    parser.add_argument("--no-medium-term", action="store_true", help="Skip the last 6 months.")
    parser.add_argument("--no-long-term", action="store_true", help="Skip all-time favourites.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible quiz.")
    parser.add_argument(
        "--chart",
        choices=[item_type.value + "s" for item_type in ItemType],
        help="Show your top artists or tracks instead of playing.",
    )
    parser.add_argument(
        "--period",
        choices=[period.value for period in Period],
        default=Period.LONG_TERM.value,
        help="Period for --chart (default: long_term).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_configuration(args: argparse.Namespace) -> GameConfiguration:
    """Translate flags into a game configuration with at least one category."""
    config = GameConfiguration(
        use_tracks=not args.no_tracks,
        use_artists=not args.no_artists,
        use_short_term=not args.no_short_term,
        use_medium_term=not args.no_medium_term,
        use_long_term=not args.no_long_term,
    )
    if not config.categories():
        raise RuntimeError("Select at least one item type and one period.")
    return config


def chart_category(args: argparse.Namespace) -> Category:
    return Category(ItemType(args.chart.rstrip("s")), Period(args.period))


def main(argv: list[str] | None = None) -> None:
    """Run the full app lifecycle: setup, game or chart, and shutdown."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    load_env_file()

    try:
        config = None if args.chart else build_configuration(args)
        redirect_uri = get_required_env("SPOTIPY_REDIRECT_URI")
    except RuntimeError as exc:
        print(exc)
        raise SystemExit(1) from exc

    print(f"Using redirect URI: {redirect_uri}")

    # One client and one knowledge base serve every replay in this run.
    sp = create_spotify_client()
    try:
        profile = sp.current_user()
        account_name = profile.get("display_name") or profile.get("id")
        print(f"Connected to Spotify account: {account_name}")

        configurator = GameConfigurator(KnowledgeBase(), SpotifyKnowledgeSource(sp))

        if args.chart:
            if not show_chart(configurator, chart_category(args)):
                raise SystemExit(1)
            return

        rng = random.Random(args.seed)
        try:
            session = prepare_session(configurator, config, max(1, args.questions), rng=rng)
        except RuntimeError as exc:
            print(exc)
            raise SystemExit(1) from exc

        while True:
            if play_game(session) == "quit" or not prompt_play_again():
                break
    finally:
        # Ensure HTTP sessions are closed on normal exit or error.
        close_sessions(sp)
