"""Calendar heatmap layout.

Each month owns a fixed block of five week columns, so month boundaries line
up the same way in every year. Weeks start on Sunday. A month that spans six
calendar weeks loses its sixth column; the layout keeps that truncation so the
grid width never changes.
"""

import calendar
from collections.abc import Mapping

from notion_heatmap.schemas.scene import DayCell
from notion_heatmap.schemas.scene import HeatmapScene
from notion_heatmap.schemas.scene import MonthBlock
from notion_heatmap.schemas.scene import TextMark
from notion_heatmap.services.heatmap_service import color_for_count
from notion_heatmap.services.heatmap_service import contribution_level


CELL_SIZE = 16
CELL_SPACING = 4
COLUMN_WIDTH = CELL_SIZE + CELL_SPACING
ROW_HEIGHT = CELL_SIZE + CELL_SPACING
LEFT_MARGIN = 60
TOP_MARGIN = 30
WEEKS_PER_MONTH = 5
DAYS_PER_WEEK = 7
TOTAL_COLUMNS = 12 * WEEKS_PER_MONTH
CANVAS_WIDTH = LEFT_MARGIN + TOTAL_COLUMNS * COLUMN_WIDTH
CANVAS_HEIGHT = TOP_MARGIN + DAYS_PER_WEEK * ROW_HEIGHT
CORNER_RADIUS = 2
BACKGROUND_COLOR = "#ffffff"

WEEKDAY_LABELS = ("S", "M", "T", "W", "T", "F", "S")
WEEKDAY_LABEL_X = 10
WEEKDAY_LABEL_FONT_SIZE = 10
WEEKDAY_LABEL_COLOR = "#999999"

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTH_LABEL_Y = 16
MONTH_LABEL_FONT_SIZE = 11
MONTH_LABEL_COLOR = "#586069"


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_months(year: int) -> list[int]:
    february = 29 if is_leap_year(year) else 28
    return [31, february, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def first_weekday_of_month(year: int, month: int) -> int:
    """Weekday of day 1 of a 0-indexed month, with 0 meaning Sunday."""

    # calendar.weekday folds years outside 1..9999 onto the 400-year cycle.
    return (calendar.weekday(year, month + 1, 1) + 1) % 7


def format_day(year: int, month: int, day: int) -> str:
    return f"{year}-{month + 1:02d}-{day:02d}"


def build_weekday_labels() -> list[TextMark]:
    return [
        TextMark(
            x=WEEKDAY_LABEL_X,
            y=TOP_MARGIN + row * ROW_HEIGHT + CELL_SIZE // 2 + 3,
            text=label,
            font_size=WEEKDAY_LABEL_FONT_SIZE,
            fill=WEEKDAY_LABEL_COLOR,
            anchor="start",
        )
        for row, label in enumerate(WEEKDAY_LABELS)
    ]


def build_heatmap_scene(counts: Mapping[str, int], year: int) -> HeatmapScene:
    """Lay out `counts` for `year` as a 12 x 5 week-column calendar grid."""

    if isinstance(year, bool) or not isinstance(year, int):
        raise TypeError("year must be an integer")

    month_lengths = days_in_months(year)
    month_labels: list[TextMark] = []
    months: list[MonthBlock] = []
    cells: list[DayCell] = []

    column = 0
    for month in range(12):
        first_weekday = first_weekday_of_month(year, month)
        total_days = month_lengths[month]
        weeks_needed = -(-(first_weekday + total_days) // DAYS_PER_WEEK)
        actual_weeks = min(weeks_needed, WEEKS_PER_MONTH)
        start_column = column

        if actual_weeks > 0:
            middle_column = start_column + actual_weeks // 2
            month_labels.append(
                TextMark(
                    x=LEFT_MARGIN + middle_column * COLUMN_WIDTH + CELL_SIZE // 2,
                    y=MONTH_LABEL_Y,
                    text=MONTH_LABELS[month],
                    font_size=MONTH_LABEL_FONT_SIZE,
                    fill=MONTH_LABEL_COLOR,
                    anchor="middle",
                )
            )

        rendered_days = 0
        for week in range(actual_weeks):
            for weekday in range(DAYS_PER_WEEK):
                day = week * DAYS_PER_WEEK + weekday - first_weekday + 1
                if not 1 <= day <= total_days:
                    continue
                date_key = format_day(year, month, day)
                count = counts.get(date_key, 0)
                cells.append(
                    DayCell(
                        date=date_key,
                        column=column,
                        row=weekday,
                        x=LEFT_MARGIN + column * COLUMN_WIDTH,
                        y=TOP_MARGIN + weekday * ROW_HEIGHT,
                        size=CELL_SIZE,
                        count=count,
                        level=contribution_level(count),
                        color=color_for_count(count),
                    )
                )
                rendered_days += 1
            column += 1

        # Pad to the fixed block width.
        column += WEEKS_PER_MONTH - actual_weeks

        months.append(
            MonthBlock(
                month=month,
                first_weekday=first_weekday,
                days_in_month=total_days,
                weeks_needed=weeks_needed,
                actual_weeks=actual_weeks,
                start_column=start_column,
                rendered_days=rendered_days,
            )
        )

    return HeatmapScene(
        year=year,
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        background=BACKGROUND_COLOR,
        cell_size=CELL_SIZE,
        corner_radius=CORNER_RADIUS,
        weekday_labels=build_weekday_labels(),
        month_labels=month_labels,
        months=months,
        cells=cells,
        columns_used=column,
    )
