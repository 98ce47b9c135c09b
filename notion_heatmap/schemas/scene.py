from typing import Literal

from pydantic import BaseModel


class TextMark(BaseModel):
    """Label drawn on the canvas; `y` is the text baseline."""

    x: int
    y: int
    text: str
    font_size: int
    fill: str
    anchor: Literal["start", "middle"]


class DayCell(BaseModel):
    """Single colored day square in the calendar grid."""

    date: str
    column: int
    row: int
    x: int
    y: int
    size: int
    count: int
    level: int
    color: str


class MonthBlock(BaseModel):
    """Layout facts for one month's five-column block."""

    month: int
    first_weekday: int
    days_in_month: int
    weeks_needed: int
    actual_weeks: int
    start_column: int
    rendered_days: int


class HeatmapScene(BaseModel):
    """Fully resolved heatmap drawing for one year."""

    year: int
    width: int
    height: int
    background: str
    cell_size: int
    corner_radius: int
    weekday_labels: list[TextMark]
    month_labels: list[TextMark]
    months: list[MonthBlock]
    cells: list[DayCell]
    columns_used: int
