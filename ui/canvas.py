"""
canvas.py — SVG Bar Chart Renderer
===================================
Pure rendering function: values + tags → SVG string.

Design decisions:
  - NO mutation.  The caller passes a snapshot (RunController.snapshot()
    or ArrayModel.snapshot()) and gets back a string.
  - Tag-based colouring is a priority lookup: a bar that is both
    "sorted" and "comparing" shows as comparing.
  - Bar heights are scaled to the canvas, never to the raw value, so
    custom arrays with large numbers still fit.
"""

from html import escape
from typing import Dict, Iterable, List, Mapping, Optional


# ---------------------------------------------------------------------------
# Visual Config — colour palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    width:   int = 900
    height:  int = 400
    bg:      str = "#0d1117"
    padding: int = 10
    gap:     int = 1

    bar_default: str = "#0ea5e9"   # cyan blue

    # tag → fill, first match wins
    tag_colors: Dict[str, str] = {
        "comparing": "#f43f5e",    # rose
        "pivot":     "#a855f7",    # purple
        "selected":  "#f59e0b",    # amber
        "sorted":    "#10b981",    # emerald
    }

    label_color: str = "#7d8590"
    label_size:  int = 10
    label_max_bars: int = 40       # value labels only when bars are wide enough


CONFIG = CanvasConfig()


def bar_color(tags: Iterable[str], config: CanvasConfig = CONFIG) -> str:
    tags = set(tags)
    for tag, color in config.tag_colors.items():
        if tag in tags:
            return color
    return config.bar_default


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    values: List[int],
    tags: Optional[Mapping] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        values : Bar heights, left to right.
        tags   : {index: [tag, …]} — keys may be ints or strings (JSON).
        config : Visual config.
    """
    tags = tags or {}
    w, h, pad = config.width, config.height, config.padding

    svg_parts = [
        f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{w}" height="{h}" fill="{config.bg}"/>',
    ]

    if values:
        top = max(max(values), 1)
        slot = (w - 2 * pad) / len(values)
        bar_w = max(slot - config.gap, 1)
        usable = h - 2 * pad - config.label_size - 4
        show_labels = len(values) <= config.label_max_bars

        for i, v in enumerate(values):
            bar_tags = tags.get(i, tags.get(str(i), ()))
            bar_h = max(usable * v / top, 1)
            x = pad + i * slot
            y = h - pad - bar_h
            svg_parts.append(
                f'<rect class="bar" data-index="{i}" x="{x:.2f}" y="{y:.2f}" '
                f'width="{bar_w:.2f}" height="{bar_h:.2f}" fill="{bar_color(bar_tags, config)}"/>'
            )
            if show_labels:
                svg_parts.append(
                    f'<text x="{x + bar_w / 2:.2f}" y="{y - 3:.2f}" text-anchor="middle" '
                    f'font-size="{config.label_size}" fill="{config.label_color}">{escape(str(v))}</text>'
                )

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)
