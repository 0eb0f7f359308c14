import re
import shutil
import sys
import textwrap

from .config import MAX_TERMINAL_WIDTH
from .models import DisplayableItem, DisplayableQuestion, DisplayableText

BOLD_TAG_PATTERN = re.compile(r"<b>(.*?)</b>")
CHOICE_LABELS = ("1", "2")


def get_terminal_width() -> int:
    return min(MAX_TERMINAL_WIDTH, shutil.get_terminal_size(fallback=(MAX_TERMINAL_WIDTH, 24)).columns)


def clear_terminal() -> None:
    if not sys.stdout.isatty():
        return

    sys.stdout.write("\033[2J\033[3J\033[H")
    sys.stdout.flush()


def format_question_text(text: str, use_ansi: bool) -> str:
    """Render <b> markup as terminal bold, or drop it for plain output."""
    replacement = "\033[1m\\1\033[0m" if use_ansi else "\\1"
    return BOLD_TAG_PATTERN.sub(replacement, text)


def _wrap(text: str, width: int) -> list[str]:
    return textwrap.wrap(
        text,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    ) or [text]


def build_option_lines(label: str, text: DisplayableText, width: int) -> list[str]:
    lines: list[str] = []
    title_width = max(30, width - 8)
    detail_width = max(30, width - 12)

    # Artist questions only carry the artist field.
    title = text.track or text.artist
    title_lines = _wrap(title, title_width)
    lines.append(f"[{label}] {title_lines[0]}")
    for continuation in title_lines[1:]:
        lines.append(f"    {continuation}")

    details = " - ".join(part for part in (text.artist, text.album) if part)
    if text.track and details:
        for detail_line in _wrap(details, detail_width):
            lines.append(f"    {detail_line}")

    return lines


def build_question_lines(
    question: DisplayableQuestion,
    question_number: int,
    question_count: int,
    score: int,
    lives: int,
) -> list[str]:
    width = get_terminal_width()
    divider = "=" * width
    lines: list[str] = [
        divider,
        f"Question {question_number}/{question_count}   Score: {score}   Lives: {lives}",
        divider,
        format_question_text(question.text, use_ansi=sys.stdout.isatty()),
        "",
    ]

    for label, text in zip(CHOICE_LABELS, (question.left_text, question.right_text)):
        lines.extend(build_option_lines(label, text, width))
        lines.append("")

    lines.append(divider)
    return lines


def render_question_screen(
    question: DisplayableQuestion,
    question_number: int,
    question_count: int,
    score: int,
    lives: int,
) -> None:
    lines = build_question_lines(
        question=question,
        question_number=question_number,
        question_count=question_count,
        score=score,
        lives=lives,
    )

    clear_terminal()
    print("\n".join(lines))


def build_answer_prompt() -> str:
    return f"Answer [{'/'.join(CHOICE_LABELS)}, q to quit] -> "


def parse_choice(raw_value: str) -> tuple[int | None, str]:
    if raw_value in {"q", "quit", "exit"}:
        return None, "quit"

    if raw_value in CHOICE_LABELS:
        return CHOICE_LABELS.index(raw_value), "answered"

    return None, "invalid"


def choice_prompt() -> tuple[int | None, str]:
    """Ask until the player picks a side or quits; EOF counts as quitting."""
    while True:
        try:
            raw_value = input(build_answer_prompt())
        except EOFError:
            print()
            return None, "quit"

        choice, status = parse_choice(raw_value.strip().lower())
        if status != "invalid":
            return choice, status
        print("Please type 1 or 2.")


def prompt_play_again() -> bool:
    try:
        raw_value = input("Play the same quiz again? [y/N] -> ")
    except EOFError:
        return False
    return raw_value.strip().lower() in {"y", "yes"}


def build_chart_lines(title: str, items: list[DisplayableItem]) -> list[str]:
    width = get_terminal_width()
    lines: list[str] = [title, "=" * min(width, max(len(title), 1))]
    rank_width = len(str(len(items))) if items else 1

    for item in items:
        if item.text.track:
            row = f"{item.text.track} - {item.text.artist}"
        else:
            row = item.text.artist
        prefix = f"{item.rank:>{rank_width}}. "
        wrapped = _wrap(row, max(30, width - len(prefix)))
        lines.append(prefix + wrapped[0])
        lines.extend(" " * len(prefix) + continuation for continuation in wrapped[1:])

    return lines
