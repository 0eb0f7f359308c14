"""Game configuration: fetch missing knowledge once and expose the game view."""

import logging
from typing import Any, Protocol

from spotipy.exceptions import SpotifyBaseException

from .knowledge import GameKnowledgeBase, KnowledgeBase, KnowledgeFetchError, parse_items
from .models import Category, GameConfiguration, KnowledgeItem

logger = logging.getLogger(__name__)


class KnowledgeSource(Protocol):
    def fetch(self, category: Category) -> list[dict[str, Any]]:
        """Return the raw top items of one category, most listened first."""
        ...


class GameConfigurator:
    """Prepares the knowledge a game configuration needs.

    Every call to `configure_game` supersedes the previous one. A fetch that
    finishes after a newer configuration started is dropped without touching
    the knowledge base or the published game view.
    """

    def __init__(self, knowledge_base: KnowledgeBase, source: KnowledgeSource) -> None:
        self.knowledge_base = knowledge_base
        self.source = source
        self._generation = 0
        self._game_kb: GameKnowledgeBase | None = None

    def configure_game(self, config: GameConfiguration) -> bool:
        """Fetch every enabled category not yet known; True on success."""
        self._generation += 1
        ticket = self._generation

        categories = config.categories()
        if not categories:
            logger.warning("Game configuration selects no categories.")
            return False

        fetched: dict[Category, list[KnowledgeItem]] = {}
        for category in categories:
            if self.knowledge_base.has_knowledge(category) or category in fetched:
                # Don't make requests for data we already have.
                continue

            try:
                raw_items = self.source.fetch(category)
            except (KnowledgeFetchError, SpotifyBaseException) as exc:
                logger.warning("Failed to fetch %s: %s", category, exc)
                return False

            if ticket != self._generation:
                logger.debug("Discarding fetch result of superseded configuration %d", ticket)
                return False

            fetched[category] = parse_items(category, raw_items)

        if ticket != self._generation:
            logger.debug("Discarding superseded configuration %d", ticket)
            return False

        for category, items in fetched.items():
            self.knowledge_base.add_knowledge(category, items)

        self._game_kb = GameKnowledgeBase(config, self.knowledge_base)
        return True

    def get_game_knowledge_base(self) -> GameKnowledgeBase | None:
        """Game view of the last configuration that completed successfully."""
        return self._game_kb
