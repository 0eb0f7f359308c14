"""Shared configuration constants used across the application."""

from pathlib import Path

from .models import Difficulty

# Spotify OAuth scopes needed for reading top artists and tracks.
SCOPE = "user-top-read"

# Local file path for the PKCE token cache.
TOKEN_CACHE_PATH = Path(".spotifycache")

# Spotify API max page size for the personalization endpoints.
TOP_ITEMS_PAGE_SIZE = 50
# Fallback edge length for images Spotify returns without dimensions.
DEFAULT_IMAGE_SIZE = 300

# Quiz tuning constants.
DEFAULT_QUESTION_COUNT = 24
MAX_LIVES = 3

# Inclusive index-distance range per difficulty.
DIFFICULTY_DISTANCES = {
    Difficulty.EASY: (6, 9),
    Difficulty.MEDIUM: (3, 5),
    Difficulty.HARD: (1, 2),
}

# Smallest category that can host the widest minimum distance.
MIN_CATEGORY_SIZE = max(low for low, _ in DIFFICULTY_DISTANCES.values()) + 1

RATING_QUOTES = (
    "The only true wisdom is in knowing you know nothing.",
    "Any fool can know. The point is to understand.",
    "The hardest thing of all is to find a black cat in a dark room, especially if there is no cat.",
    "Knowledge is a weapon. I intend to be formidably armed.",
    "Great minds are always feared by lesser minds.",
    "When you reach the end of what you should know, you will be at the beginning of what you should sense.",
)

RATING_IMAGES = (
    "ratings/r1.jpg",
    "ratings/r2.jpg",
    "ratings/r3.png",
    "ratings/r4.png",
    "ratings/r5.jpg",
    "ratings/r6.jpg",
)

MAX_TERMINAL_WIDTH = 110
