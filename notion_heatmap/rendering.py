from html import escape
from pathlib import Path

from PIL import Image
from PIL import ImageDraw
from PIL import ImageFont

from notion_heatmap.schemas.scene import HeatmapScene
from notion_heatmap.schemas.scene import TextMark


PIL_ANCHORS = {"start": "ls", "middle": "ms"}


def _draw_label(draw: ImageDraw.ImageDraw, mark: TextMark) -> None:
    font = ImageFont.load_default(size=mark.font_size)
    draw.text(
        (mark.x, mark.y),
        mark.text,
        fill=mark.fill,
        font=font,
        anchor=PIL_ANCHORS[mark.anchor],
    )


def rasterize_scene(scene: HeatmapScene) -> Image.Image:
    """Draw the scene onto a new RGB image of the scene's canvas size."""

    image = Image.new("RGB", (scene.width, scene.height), color=scene.background)
    draw = ImageDraw.Draw(image)

    for mark in [*scene.weekday_labels, *scene.month_labels]:
        _draw_label(draw, mark)

    for cell in scene.cells:
        draw.rounded_rectangle(
            [(cell.x, cell.y), (cell.x + cell.size - 1, cell.y + cell.size - 1)],
            radius=scene.corner_radius,
            fill=cell.color,
        )

    return image


def render_png(scene: HeatmapScene, path: Path) -> Path:
    """Rasterize the scene and save it as a PNG at `path`."""

    path.parent.mkdir(parents=True, exist_ok=True)
    rasterize_scene(scene).save(path, format="PNG")
    return path


def scene_to_svg(scene: HeatmapScene) -> str:
    parts = [
        f'<svg width="{scene.width}" height="{scene.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background:{scene.background}">'
    ]
    for mark in [*scene.weekday_labels, *scene.month_labels]:
        parts.append(
            f'<text x="{mark.x}" y="{mark.y}" font-size="{mark.font_size}" '
            f'fill="{mark.fill}" text-anchor="{mark.anchor}">{escape(mark.text)}</text>'
        )
    for cell in scene.cells:
        parts.append(
            f'<rect x="{cell.x}" y="{cell.y}" width="{cell.size}" '
            f'height="{cell.size}" rx="{scene.corner_radius}" fill="{cell.color}"/>'
        )
    parts.append("</svg>")
    return "".join(parts)


def write_svg(scene: HeatmapScene, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(scene_to_svg(scene), encoding="utf-8")
    return path
