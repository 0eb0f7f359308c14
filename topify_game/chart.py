"""Chart view: browse the top artists or tracks of one period."""

from .configurator import GameConfigurator
from .display import project_items
from .models import Category, GameConfiguration, ItemType, Period
from .ui import build_chart_lines


def chart_configuration(category: Category) -> GameConfiguration:
    """Configuration enabling exactly one category."""
    return GameConfiguration(
        use_tracks=category.item_type is ItemType.TRACK,
        use_artists=category.item_type is ItemType.ARTIST,
        use_short_term=category.period is Period.SHORT_TERM,
        use_medium_term=category.period is Period.MEDIUM_TERM,
        use_long_term=category.period is Period.LONG_TERM,
    )


def chart_title(category: Category) -> str:
    return f"Your top {category.item_type.value}s {category.period.description}"


def show_chart(configurator: GameConfigurator, category: Category) -> bool:
    """Fetch a category if needed and print it ranked; False when fetching failed."""
    if not configurator.configure_game(chart_configuration(category)):
        print("Failed to retrieve data from Spotify.")
        return False

    items = project_items(category, configurator.knowledge_base)
    if not items:
        print("Nothing to show for this period yet.")
        return True

    print("\n".join(build_chart_lines(chart_title(category), items)))
    return True
