"""Knowledge base of the user's top artists/tracks, indexed by category."""

import logging
from typing import Any

from .config import DEFAULT_IMAGE_SIZE
from .models import (
    Album,
    Artist,
    Category,
    GameConfiguration,
    ImageURL,
    ItemType,
    KnowledgeItem,
    Period,
    Track,
)

logger = logging.getLogger(__name__)


class KnowledgeFetchError(Exception):
    """Raised by a knowledge source when top items could not be retrieved."""


class KnowledgeBase:
    """Session-scoped store of fetched top items.

    Each category is populated at most once. Records keep the order Spotify
    returned them in (most listened first), so an index stays valid for as
    long as the store lives.
    """

    def __init__(self) -> None:
        self._items: dict[Category, tuple[KnowledgeItem, ...]] = {}

    def has_knowledge(self, category: Category) -> bool:
        return category in self._items

    def add_knowledge(self, category: Category, items: list[KnowledgeItem]) -> bool:
        """Store items for a category; the first write wins."""
        if category in self._items:
            logger.debug("Ignoring repeated knowledge for %s", category)
            return False

        for item in items:
            if item.item_type is not category.item_type:
                raise ValueError(f"{item.item_type.value} record cannot be stored under {category}")

        self._items[category] = tuple(items)
        logger.debug("Stored %d items for %s", len(items), category)
        return True

    def get_items(self, category: Category) -> tuple[KnowledgeItem, ...]:
        return self._items.get(category, ())

    def get_category_size(self, category: Category) -> int:
        """Number of records in a category, or -1 when it was never fetched."""
        items = self._items.get(category)
        if items is None:
            return -1
        return len(items)

    def get_item(self, category: Category, index: int) -> KnowledgeItem | None:
        items = self._items.get(category, ())
        if not 0 <= index < len(items):
            return None
        return items[index]

    def get_artist(self, period: Period, index: int) -> Artist | None:
        item = self.get_item(Category(ItemType.ARTIST, period), index)
        return item if isinstance(item, Artist) else None

    def get_track(self, period: Period, index: int) -> Track | None:
        item = self.get_item(Category(ItemType.TRACK, period), index)
        return item if isinstance(item, Track) else None


class GameKnowledgeBase:
    """The slice of the knowledge base a single game configuration plays on."""

    def __init__(self, configuration: GameConfiguration, knowledge_base: KnowledgeBase) -> None:
        self.configuration = configuration
        self.knowledge_base = knowledge_base

    def categories(self) -> list[Category]:
        return self.configuration.categories()

    def has_knowledge(self, category: Category) -> bool:
        return self.knowledge_base.has_knowledge(category)

    def get_category_size(self, category: Category) -> int:
        return self.knowledge_base.get_category_size(category)

    def get_artist(self, period: Period, index: int) -> Artist | None:
        return self.knowledge_base.get_artist(period, index)

    def get_track(self, period: Period, index: int) -> Track | None:
        return self.knowledge_base.get_track(period, index)


def parse_images(raw_images: Any) -> tuple[ImageURL, ...]:
    """Normalize Spotify image objects, sorted ascending by width."""
    if not isinstance(raw_images, list):
        return ()

    images: list[ImageURL] = []
    for raw_image in raw_images:
        if not isinstance(raw_image, dict) or not raw_image.get("url"):
            continue
        images.append(
            ImageURL(
                url=str(raw_image["url"]),
                width=raw_image.get("width") or DEFAULT_IMAGE_SIZE,
                height=raw_image.get("height") or DEFAULT_IMAGE_SIZE,
            )
        )

    return tuple(sorted(images, key=lambda image: image.width))


def parse_artist(raw_artist: dict[str, Any] | None) -> Artist | None:
    if not isinstance(raw_artist, dict):
        return None

    artist_id = raw_artist.get("id")
    if not artist_id:
        return None

    return Artist(
        id=str(artist_id),
        name=str(raw_artist.get("name", "Unknown Artist")),
        images=parse_images(raw_artist.get("images")),
    )


def parse_track(raw_track: dict[str, Any] | None) -> Track | None:
    if not isinstance(raw_track, dict):
        return None

    track_id = raw_track.get("id")
    if not track_id:
        return None

    raw_artists = raw_track.get("artists", [])
    artists: list[str] = []
    if isinstance(raw_artists, list):
        artists = [artist.get("name", "").strip() for artist in raw_artists if isinstance(artist, dict)]
        artists = [artist for artist in artists if artist]

    if not artists:
        artists = ["Unknown Artist"]

    raw_album = raw_track.get("album")
    if not isinstance(raw_album, dict):
        raw_album = {}

    album = Album(
        id=str(raw_album.get("id", "")),
        name=str(raw_album.get("name", "")),
        images=parse_images(raw_album.get("images")),
    )

    return Track(
        id=str(track_id),
        name=str(raw_track.get("name", "Unknown Track")),
        artists=tuple(artists),
        album=album,
        preview_url=raw_track.get("preview_url") or None,
    )


def parse_items(category: Category, raw_items: list[dict[str, Any]]) -> list[KnowledgeItem]:
    """Turn one page of Spotify top items into records, keeping their order."""
    parser = parse_artist if category.item_type is ItemType.ARTIST else parse_track

    items: list[KnowledgeItem] = []
    for raw_item in raw_items:
        item = parser(raw_item)
        if item is None:
            # Skip malformed rows instead of failing the whole category.
            logger.debug("Skipping malformed %s item in %s", category.item_type.value, category)
            continue
        items.append(item)

    return items
