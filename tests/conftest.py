"""Shared fixtures: in-memory knowledge and a fake Spotify knowledge source."""

import pytest

from topify_game.knowledge import GameKnowledgeBase, KnowledgeBase, KnowledgeFetchError
from topify_game.models import Album, Artist, Category, GameConfiguration, ItemType, Period, Track


def make_artists(count, prefix="artist"):
    return [Artist(id=f"{prefix}-{i}", name=f"Artist {i}") for i in range(count)]


def make_tracks(count, prefix="track"):
    return [
        Track(
            id=f"{prefix}-{i}",
            name=f"Track {i} (Remix)",
            artists=(f"Singer {i}", f"Guest {i}"),
            album=Album(id=f"album-{i}", name=f"Album {i}"),
            preview_url=f"https://p.scdn.co/mp3-preview/{i}",
        )
        for i in range(count)
    ]


def make_raw_artist(i):
    return {
        "id": f"artist-{i}",
        "name": f"Artist {i}",
        "images": [{"url": f"https://i.scdn.co/image/a{i}", "width": 640, "height": 640}],
    }


def make_raw_track(i):
    return {
        "id": f"track-{i}",
        "name": f"Track {i}",
        "artists": [{"name": f"Singer {i}"}],
        "album": {"id": f"album-{i}", "name": f"Album {i}", "images": []},
        "preview_url": None,
    }


def fill_knowledge_base(knowledge_base, categories, size):
    for category in categories:
        if category.item_type is ItemType.ARTIST:
            knowledge_base.add_knowledge(category, make_artists(size, prefix=category.period.value))
        else:
            knowledge_base.add_knowledge(category, make_tracks(size, prefix=category.period.value))
    return knowledge_base


def build_game_kb(config=None, size=20):
    config = config or GameConfiguration()
    knowledge_base = fill_knowledge_base(KnowledgeBase(), config.categories(), size)
    return GameKnowledgeBase(config, knowledge_base)


class FakeKnowledgeSource:
    """Serves canned raw items per category and records every fetch."""

    def __init__(self, size=20, fail=False):
        self.size = size
        self.fail = fail
        self.calls = []

    def fetch(self, category):
        self.calls.append(category)
        if self.fail:
            raise KnowledgeFetchError("boom")

        make_raw = make_raw_artist if category.item_type is ItemType.ARTIST else make_raw_track
        return [make_raw(i) for i in range(self.size)]


@pytest.fixture
def track_long_term():
    return Category(ItemType.TRACK, Period.LONG_TERM)


@pytest.fixture
def artist_short_term():
    return Category(ItemType.ARTIST, Period.SHORT_TERM)


@pytest.fixture
def full_game_kb():
    return build_game_kb()


@pytest.fixture
def fake_source():
    return FakeKnowledgeSource()
