"""Tests for the knowledge base, record parsing and category enumeration."""

import pytest
from conftest import make_artists, make_raw_artist, make_raw_track, make_tracks

from topify_game.config import DEFAULT_IMAGE_SIZE
from topify_game.knowledge import GameKnowledgeBase, KnowledgeBase, parse_images, parse_items
from topify_game.models import Artist, Category, GameConfiguration, ItemType, Period, Track


class TestKnowledgeBase:
    def test_unknown_category(self, track_long_term):
        knowledge_base = KnowledgeBase()

        assert not knowledge_base.has_knowledge(track_long_term)
        assert knowledge_base.get_category_size(track_long_term) == -1
        assert knowledge_base.get_items(track_long_term) == ()

    def test_add_and_size(self, track_long_term):
        knowledge_base = KnowledgeBase()

        assert knowledge_base.add_knowledge(track_long_term, make_tracks(12)) is True
        assert knowledge_base.has_knowledge(track_long_term)
        assert knowledge_base.get_category_size(track_long_term) == 12

    def test_empty_category_is_known(self, track_long_term):
        knowledge_base = KnowledgeBase()
        knowledge_base.add_knowledge(track_long_term, [])

        assert knowledge_base.has_knowledge(track_long_term)
        assert knowledge_base.get_category_size(track_long_term) == 0

    def test_first_write_wins(self, artist_short_term):
        knowledge_base = KnowledgeBase()
        knowledge_base.add_knowledge(artist_short_term, make_artists(10, prefix="first"))

        assert knowledge_base.add_knowledge(artist_short_term, make_artists(3, prefix="second")) is False
        assert knowledge_base.get_category_size(artist_short_term) == 10
        assert knowledge_base.get_artist(Period.SHORT_TERM, 0).id == "first-0"

    def test_categories_compare_by_value(self):
        knowledge_base = KnowledgeBase()
        knowledge_base.add_knowledge(Category(ItemType.ARTIST, Period.LONG_TERM), make_artists(8))

        assert knowledge_base.has_knowledge(Category(ItemType.ARTIST, Period.LONG_TERM))
        assert not knowledge_base.has_knowledge(Category(ItemType.TRACK, Period.LONG_TERM))

    def test_lookup_by_index(self, track_long_term):
        knowledge_base = KnowledgeBase()
        knowledge_base.add_knowledge(track_long_term, make_tracks(5))

        assert knowledge_base.get_track(Period.LONG_TERM, 4).id == "track-4"

    @pytest.mark.parametrize("index", [-1, 5, 50])
    def test_out_of_range_is_absent(self, track_long_term, index):
        knowledge_base = KnowledgeBase()
        knowledge_base.add_knowledge(track_long_term, make_tracks(5))

        assert knowledge_base.get_track(Period.LONG_TERM, index) is None

    def test_missing_category_is_absent(self):
        knowledge_base = KnowledgeBase()

        assert knowledge_base.get_artist(Period.MEDIUM_TERM, 0) is None
        assert knowledge_base.get_track(Period.MEDIUM_TERM, 0) is None

    def test_rejects_records_of_the_wrong_type(self, track_long_term):
        with pytest.raises(ValueError):
            KnowledgeBase().add_knowledge(track_long_term, make_artists(3))


class TestGameKnowledgeBase:
    def test_delegates_to_knowledge_base(self, artist_short_term):
        knowledge_base = KnowledgeBase()
        knowledge_base.add_knowledge(artist_short_term, make_artists(9))
        game_kb = GameKnowledgeBase(GameConfiguration(use_tracks=False), knowledge_base)

        assert game_kb.has_knowledge(artist_short_term)
        assert game_kb.get_category_size(artist_short_term) == 9
        assert game_kb.get_artist(Period.SHORT_TERM, 2).name == "Artist 2"
        assert game_kb.get_track(Period.SHORT_TERM, 2) is None
        assert len(game_kb.categories()) == 3


class TestGameConfiguration:
    def test_all_enabled_yields_six_in_fixed_order(self):
        categories = GameConfiguration().categories()

        assert categories == [
            Category(ItemType.ARTIST, Period.SHORT_TERM),
            Category(ItemType.ARTIST, Period.MEDIUM_TERM),
            Category(ItemType.ARTIST, Period.LONG_TERM),
            Category(ItemType.TRACK, Period.SHORT_TERM),
            Category(ItemType.TRACK, Period.MEDIUM_TERM),
            Category(ItemType.TRACK, Period.LONG_TERM),
        ]

    def test_single_category(self):
        config = GameConfiguration(use_artists=False, use_short_term=False, use_medium_term=False)

        assert config.categories() == [Category(ItemType.TRACK, Period.LONG_TERM)]

    def test_nothing_enabled(self):
        assert GameConfiguration(use_short_term=False, use_medium_term=False, use_long_term=False).categories() == []


class TestParsing:
    def test_parse_artists_keeps_order(self, artist_short_term):
        items = parse_items(artist_short_term, [make_raw_artist(i) for i in range(3)])

        assert [item.id for item in items] == ["artist-0", "artist-1", "artist-2"]
        assert all(isinstance(item, Artist) for item in items)
        assert items[0].images[0].width == 640

    def test_parse_tracks(self, track_long_term):
        items = parse_items(track_long_term, [make_raw_track(7)])

        track = items[0]
        assert isinstance(track, Track)
        assert track.item_type is ItemType.TRACK
        assert track.artists == ("Singer 7",)
        assert track.album.name == "Album 7"
        assert track.preview_url is None

    def test_malformed_rows_are_skipped(self, track_long_term):
        raw_items = [make_raw_track(0), {"name": "no id"}, None, make_raw_track(1)]

        items = parse_items(track_long_term, raw_items)

        assert [item.id for item in items] == ["track-0", "track-1"]

    def test_track_without_artists(self, track_long_term):
        raw_track = make_raw_track(0)
        raw_track["artists"] = []

        assert parse_items(track_long_term, [raw_track])[0].artists == ("Unknown Artist",)

    def test_images_sorted_by_width_with_default_size(self):
        images = parse_images(
            [
                {"url": "big", "width": 640, "height": 640},
                {"url": "unsized", "width": None, "height": None},
                {"url": "small", "width": 64, "height": 64},
                {"width": 10},
            ]
        )

        assert [image.url for image in images] == ["small", "unsized", "big"]
        assert images[1].width == DEFAULT_IMAGE_SIZE
