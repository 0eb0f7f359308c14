"""Value types shared by the knowledge base, question generator and session."""

from dataclasses import dataclass, field
from enum import Enum


class ItemType(Enum):
    ARTIST = "artist"
    TRACK = "track"


class Period(Enum):
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"

    @property
    def time_range(self) -> str:
        """Value of Spotify's `time_range` query parameter for this period."""
        return self.value

    @property
    def description(self) -> str:
        return PERIOD_DESCRIPTIONS[self]


PERIOD_DESCRIPTIONS = {
    Period.SHORT_TERM: "in the last 4 weeks",
    Period.MEDIUM_TERM: "in the last 6 months",
    Period.LONG_TERM: "all time",
}


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Category:
    """One bucket of top items: an item type over a listening period."""

    item_type: ItemType
    period: Period


@dataclass(frozen=True)
class ImageURL:
    url: str
    width: int
    height: int


@dataclass(frozen=True)
class Album:
    id: str
    name: str
    images: tuple[ImageURL, ...] = ()


@dataclass(frozen=True)
class Artist:
    id: str
    name: str
    images: tuple[ImageURL, ...] = ()
    item_type: ItemType = field(default=ItemType.ARTIST, init=False)


@dataclass(frozen=True)
class Track:
    id: str
    name: str
    artists: tuple[str, ...]
    album: Album
    preview_url: str | None = None
    item_type: ItemType = field(default=ItemType.TRACK, init=False)


KnowledgeItem = Artist | Track


@dataclass(frozen=True)
class GameConfiguration:
    """Which item types and periods a quiz draws its questions from."""

    use_tracks: bool = True
    use_artists: bool = True
    use_short_term: bool = True
    use_medium_term: bool = True
    use_long_term: bool = True

    def categories(self) -> list[Category]:
        """Enabled categories, artists first, periods short to long.

        Yields 1, 2, 3, 4 or 6 categories (0 when nothing is enabled).
        """
        periods = [
            period
            for period, enabled in (
                (Period.SHORT_TERM, self.use_short_term),
                (Period.MEDIUM_TERM, self.use_medium_term),
                (Period.LONG_TERM, self.use_long_term),
            )
            if enabled
        ]
        item_types = [
            item_type
            for item_type, enabled in ((ItemType.ARTIST, self.use_artists), (ItemType.TRACK, self.use_tracks))
            if enabled
        ]
        return [Category(item_type, period) for item_type in item_types for period in periods]


@dataclass
class Question:
    category: Category
    difficulty: Difficulty
    i_left: int
    i_right: int
    answer: int
    text: str = ""


@dataclass(frozen=True)
class DisplayableText:
    track: str = ""
    artist: str = ""
    album: str = ""


@dataclass(frozen=True)
class DisplayableQuestion:
    """A question with both candidates resolved to printable text."""

    category: Category
    difficulty: Difficulty
    i_left: int
    i_right: int
    answer: int
    text: str
    left_text: DisplayableText
    right_text: DisplayableText


@dataclass(frozen=True)
class DisplayableItem:
    """One chart row: rank, printable text and the Spotify id it came from."""

    rank: int
    text: DisplayableText
    knowledge_id: str
    preview_url: str | None = None
