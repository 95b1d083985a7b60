import logging
from dataclasses import dataclass
from pathlib import Path

from matplotlib import font_manager
from matplotlib.font_manager import FontProperties

logger = logging.getLogger(__name__)

REGULAR_FONT_FILE = "JetBrainsMono-Regular.ttf"
BOLD_FONT_FILE = "JetBrainsMono-Bold.ttf"
FALLBACK_FAMILY = "monospace"


@dataclass(frozen=True)
class ChartFonts:
    regular: FontProperties
    bold: FontProperties

    @property
    def regular_family(self) -> str:
        return self.regular.get_family()[0]


_registered_fonts: ChartFonts | None = None


def _load_font(path: Path, weight: str) -> FontProperties:
    if not path.is_file():
        logger.warning("Font %s not found, using %s", path, FALLBACK_FAMILY)
        return FontProperties(family=FALLBACK_FAMILY, weight=weight)

    font_manager.fontManager.addfont(str(path))
    family = FontProperties(fname=str(path)).get_name()
    logger.info("Registered font %s from %s", family, path)
    return FontProperties(family=family, weight=weight)


def register_fonts(font_dir: str | Path) -> ChartFonts:
    """Register the chart fonts with matplotlib once per process."""

    global _registered_fonts

    font_path = Path(font_dir)
    _registered_fonts = ChartFonts(
        regular=_load_font(font_path / REGULAR_FONT_FILE, "regular"),
        bold=_load_font(font_path / BOLD_FONT_FILE, "bold"),
    )
    return _registered_fonts


def get_fonts() -> ChartFonts:
    if _registered_fonts is None:
        return ChartFonts(
            regular=FontProperties(family=FALLBACK_FAMILY, weight="regular"),
            bold=FontProperties(family=FALLBACK_FAMILY, weight="bold"),
        )
    return _registered_fonts
