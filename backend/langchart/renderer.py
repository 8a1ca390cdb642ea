"""SVG rendering of the ranked language list.

Layout: a title with the top language called out, a single rounded progress
bar split into one segment per language, and a 3-column legend for the
remaining languages. Output depends only on the input list.
"""

from typing import List, Optional, Sequence

from .aggregator import RankedEntry
from .exceptions import RenderingError

WIDTH = 620
HEIGHT = 260

BAR_WIDTH = 520
BAR_HEIGHT = 10

LEGEND_COLUMNS = 3
LEGEND_SPACING_X = 190
LEGEND_SPACING_Y = 28
LEGEND_START_X = 30
LEGEND_START_Y = 70

COLORS = [
    "#3572A5",
    "#e34c26",
    "#fedf5b",
    "#3178c6",
    "#f1e05a",
    "#ff5a03",
    "#563d7c",
    "#4F5D95",
    "#00ADD8",
    "#701516",
]

STYLE = """
  <style>
    .header {
      font: 600 20px 'Segoe UI', Ubuntu, Sans-Serif;
      fill: #e7f216;
    }
    .lang-name {
      font: 400 13px 'Segoe UI', Ubuntu, Sans-Serif;
      fill: #ffffff;
    }
    .top-lang {
      font: 600 16px 'Segoe UI', Ubuntu, Sans-Serif;
      fill: #ffffff;
    }
    .credit {
      font: 600 12px 'Segoe UI', Ubuntu, Sans-Serif;
      fill: #c7c7c7;
    }
  </style>"""


def escape_xml(text) -> str:
    """Sanitize text for SVG output."""
    return str(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def format_number(value: float) -> str:
    """Shortest decimal form: 80.0 -> '80', 33.33 -> '33.33'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def color_for(index: int) -> str:
    return COLORS[index % len(COLORS)]


def segment_widths(entries: Sequence[RankedEntry], bar_width: int = BAR_WIDTH) -> List[float]:
    # Rounded percents can total slightly over 100; the bar never grows past bar_width.
    widths = []
    x_offset = 0.0
    for e in entries:
        width = max(0.0, min((e.percent / 100) * bar_width, bar_width - x_offset))
        widths.append(width)
        x_offset += width
    return widths


def _label(entry: RankedEntry) -> str:
    return f"{escape_xml(entry.lang)} {format_number(entry.percent)}%"


def _bar_segments(entries: Sequence[RankedEntry]) -> str:
    rects = []
    x_offset = 0.0
    for i, width in enumerate(segment_widths(entries)):
        rects.append(
            f'<rect mask="url(#rect-mask)" x="{format_number(x_offset)}" y="0" '
            f'width="{format_number(width)}" height="{BAR_HEIGHT}" fill="{color_for(i)}" />'
        )
        x_offset += width
    return "\n    ".join(rects)


def _legend(entries: Sequence[RankedEntry]) -> str:
    cells = []
    # The top entry is shown in the header; the legend starts at rank 2.
    for i, entry in enumerate(entries[1:]):
        col = i % LEGEND_COLUMNS
        row = i // LEGEND_COLUMNS
        x = LEGEND_START_X + col * LEGEND_SPACING_X
        y = LEGEND_START_Y + row * LEGEND_SPACING_Y
        cells.append(
            f"""
    <g transform="translate({x}, {y})">
      <circle cx="5" cy="6" r="5" fill="{color_for(i + 1)}" />
      <text x="15" y="10" class="lang-name">{_label(entry)}</text>
    </g>"""
        )
    return "".join(cells)


def render_chart(entries: Sequence[RankedEntry], credit: Optional[str] = None) -> str:
    if not entries:
        raise RenderingError("Cannot render a chart without language data")

    top = entries[0]
    credit_line = ""
    if credit:
        credit_line = f'\n  <text x="420" y="230" class="credit">{escape_xml(credit)}</text>'

    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{WIDTH}" height="{HEIGHT}" viewBox="0 0 {WIDTH} {HEIGHT}" fill="none">{STYLE}

  <rect x="0" y="0" width="100%" height="100%" fill="#000000" rx="6"/>

  <text x="30" y="35" class="header">Most Used Languages</text>
  <text x="310" y="35" class="top-lang">\U0001F451 {_label(top)}</text>

  <mask id="rect-mask">
    <rect x="0" y="0" width="{BAR_WIDTH}" height="{BAR_HEIGHT}" fill="white" rx="5" ry="5"/>
  </mask>

  <g transform="translate(30, 70)">
    {_bar_segments(entries)}
  </g>

  <g transform="translate(0, 50)">{_legend(entries)}
  </g>{credit_line}
</svg>
"""
