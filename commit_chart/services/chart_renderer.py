import io

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch
from matplotlib.transforms import IdentityTransform

from commit_chart.core.fonts import ChartFonts
from commit_chart.core.fonts import get_fonts
from commit_chart.core.palette import ChartColor
from commit_chart.core.palette import resolve_color
from commit_chart.models import TimeSeries

WIDTH = 495
HEIGHT = 195
DPI = 100
CORNER_RADIUS = 15
# Sizes in pixels; matplotlib takes points.
TITLE_FONT_PX = 16
TICK_FONT_PX = 12
LINE_WIDTH_PX = 4
Y_TICK_COLOR = (1.0, 1.0, 1.0, 0.95)


class ChartRenderError(Exception):
    """Raised when the chart image cannot be produced."""


def px_to_points(pixels: float) -> float:
    return pixels * 72 / DPI


def render_commit_chart(
    series: TimeSeries,
    title: str,
    color: ChartColor,
    fonts: ChartFonts | None = None,
) -> bytes:
    """Render a cumulative commit series as a PNG line chart.

    The image is WIDTH x HEIGHT pixels: a black rounded card, the title on
    top, a date x axis and a y axis starting at zero. No legend.

    Raises:
        ChartRenderError: If matplotlib fails to build or encode the image.
    """

    colors = resolve_color(color)
    fonts = fonts or get_fonts()

    try:
        figure = Figure(figsize=(WIDTH / DPI, HEIGHT / DPI), dpi=DPI)
        FigureCanvasAgg(figure)
        figure.add_artist(
            FancyBboxPatch(
                (0, 0),
                WIDTH,
                HEIGHT,
                boxstyle=f"round,pad=0,rounding_size={CORNER_RADIUS}",
                transform=IdentityTransform(),
                facecolor="black",
                edgecolor="none",
                zorder=-10,
            )
        )
        figure.subplots_adjust(left=0.09, right=0.98, top=0.84, bottom=0.14)

        ax = figure.add_subplot()
        ax.set_facecolor("none")
        ax.plot(
            series.days,
            series.cumulative_counts,
            color=colors.line,
            linewidth=px_to_points(LINE_WIDTH_PX),
        )
        ax.fill_between(
            series.days, series.cumulative_counts, color=colors.area, linewidth=0
        )

        title_font = fonts.bold.copy()
        title_font.set_size(px_to_points(TITLE_FONT_PX))
        ax.set_title(title, color=colors.title, fontproperties=title_font)

        locator = mdates.AutoDateLocator(maxticks=6)
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
        ax.set_ylim(0, max(series.total, 1) * 1.1)

        ax.tick_params(
            axis="x",
            colors=colors.xlabel,
            labelsize=px_to_points(TICK_FONT_PX),
            labelfontfamily=fonts.regular_family,
        )
        ax.tick_params(
            axis="y",
            colors=Y_TICK_COLOR,
            labelsize=px_to_points(TICK_FONT_PX),
            labelfontfamily=fonts.regular_family,
        )
        ax.grid(False)
        ax.xaxis.get_offset_text().set_color(colors.xlabel)
        for spine in ax.spines.values():
            spine.set_visible(False)

        buffer = io.BytesIO()
        figure.savefig(buffer, format="png", dpi=DPI, transparent=True)
    except Exception as exc:
        raise ChartRenderError("Chart rendering failed") from exc

    return buffer.getvalue()
