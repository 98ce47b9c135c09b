import logging
from pathlib import Path

import sentry_sdk
from pydantic import ValidationError

from notion_heatmap.core.observability import configure_logging
from notion_heatmap.core.observability import init_sentry
from notion_heatmap.rendering import render_png
from notion_heatmap.rendering import write_svg
from notion_heatmap.services.calendar_layout import build_heatmap_scene
from notion_heatmap.services.heatmap_service import fetch_date_counts
from notion_heatmap.services.heatmap_service import total_count
from notion_heatmap.settings import Settings
from notion_heatmap.settings import require_notion_credentials


logger = logging.getLogger(__name__)

PNG_FILENAME = "heatmap.png"
SVG_FILENAME = "heatmap.svg"


def run(settings: Settings) -> Path:
    """Fetch, aggregate, lay out and rasterize one year's heatmap."""

    database_id, token = require_notion_credentials(settings)

    logger.info("Fetching data from Notion...")
    counts = fetch_date_counts(settings, database_id, token)
    year = settings.target_year()
    logger.info("Fetched %d records for %d", total_count(counts), year)

    scene = build_heatmap_scene(counts, year)
    output_dir = Path(settings.output_dir)
    if settings.write_svg:
        write_svg(scene, output_dir / SVG_FILENAME)

    png_path = render_png(scene, output_dir / PNG_FILENAME)
    logger.info("Heatmap saved to %s", png_path)
    return png_path


def main(settings: Settings | None = None) -> int:
    """Run once and return the process exit status."""

    if settings is None:
        try:
            settings = Settings()
        except ValidationError as exc:
            configure_logging()
            logger.error("Invalid configuration: %s", exc)
            sentry_sdk.capture_exception(exc)
            return 1
    configure_logging(settings.log_level)
    init_sentry(settings)

    try:
        run(settings)
    except Exception as exc:
        logger.exception("Heatmap generation failed: %s", exc)
        sentry_sdk.capture_exception(exc)
        sentry_sdk.flush()
        return 1
    return 0
