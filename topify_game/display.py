"""Projection of questions and chart rows into printable text."""

from .knowledge import GameKnowledgeBase, KnowledgeBase
from .models import (
    Artist,
    Category,
    Difficulty,
    DisplayableItem,
    DisplayableQuestion,
    DisplayableText,
    ItemType,
    Period,
    Question,
)


def get_track_short_name(track_name: str) -> str:
    """Drop suffixes such as "(feat. ...)" or " - Remastered" from a track name."""
    end = track_name.find("(")
    if end == -1:
        end = track_name.find(" -")

    if end == -1:
        return track_name
    return track_name[:end]


def get_first_artist(artists: str) -> str:
    end = artists.find(",")
    if end == -1:
        return artists
    return artists[:end]


def _artist_text(game_kb: GameKnowledgeBase, period: Period, index: int) -> DisplayableText:
    artist = game_kb.get_artist(period, index)
    if artist is None:
        return DisplayableText()
    return DisplayableText(artist=artist.name)


def _track_text(game_kb: GameKnowledgeBase, period: Period, index: int) -> DisplayableText:
    track = game_kb.get_track(period, index)
    if track is None:
        return DisplayableText()
    return DisplayableText(
        track=get_track_short_name(track.name),
        artist=get_first_artist(", ".join(track.artists)),
        album=track.album.name,
    )


def project_question(question: Question, game_kb: GameKnowledgeBase) -> DisplayableQuestion:
    """Resolve both candidate indices of a question to display text.

    Missing records project to empty strings, never to an error.
    """
    category = question.category
    if category.item_type is ItemType.ARTIST:
        resolve = _artist_text
    else:
        resolve = _track_text

    return DisplayableQuestion(
        category=category,
        difficulty=question.difficulty,
        i_left=question.i_left,
        i_right=question.i_right,
        answer=question.answer,
        text=question.text,
        left_text=resolve(game_kb, category.period, question.i_left),
        right_text=resolve(game_kb, category.period, question.i_right),
    )


def empty_displayable_question() -> DisplayableQuestion:
    """Placeholder shown before the first question is available."""
    return DisplayableQuestion(
        category=Category(ItemType.TRACK, Period.LONG_TERM),
        difficulty=Difficulty.EASY,
        i_left=0,
        i_right=0,
        answer=0,
        text="",
        left_text=DisplayableText(),
        right_text=DisplayableText(),
    )


def project_items(category: Category, knowledge_base: KnowledgeBase) -> list[DisplayableItem]:
    """Chart rows for every record of a category, ranked from 1."""
    rows: list[DisplayableItem] = []
    for rank, item in enumerate(knowledge_base.get_items(category), start=1):
        if isinstance(item, Artist):
            rows.append(DisplayableItem(rank=rank, text=DisplayableText(artist=item.name), knowledge_id=item.id))
            continue

        rows.append(
            DisplayableItem(
                rank=rank,
                text=DisplayableText(
                    track=get_track_short_name(item.name),
                    artist=", ".join(item.artists),
                    album=item.album.name,
                ),
                knowledge_id=item.id,
                preview_url=item.preview_url,
            )
        )

    return rows
