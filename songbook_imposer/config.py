"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import enum

# PIP3 modules
import reportlab.lib.pagesizes


A4_PORTRAIT = reportlab.lib.pagesizes.portrait(reportlab.lib.pagesizes.A4)
A4_LANDSCAPE = reportlab.lib.pagesizes.landscape(reportlab.lib.pagesizes.A4)

SEPARATOR_WIDTH = 1.0
SEPARATOR_COLOR = (0, 0, 0, 255)

DEFAULT_PADDING = 10.0
DEFAULT_TITLE = "Songbook"


class PageSize(enum.Enum):
	FULL = "full"
	HALF = "half"
	QUARTER = "quarter"
	EIGHTH = "eighth"

	@property
	def label(self) -> str:
		return PAGE_SIZE_LABELS[self]

	def __str__(self) -> str:
		return self.label


@dataclasses.dataclass(frozen=True)
class SheetLayout:
	rows: int
	columns: int
	sheet_size: tuple[float, float]

	@property
	def pages_per_sheet(self) -> int:
		return self.rows * self.columns


SHEET_LAYOUTS = {
	PageSize.FULL: SheetLayout(rows=1, columns=1, sheet_size=A4_PORTRAIT),
	PageSize.HALF: SheetLayout(rows=1, columns=2, sheet_size=A4_LANDSCAPE),
	PageSize.QUARTER: SheetLayout(rows=2, columns=2, sheet_size=A4_PORTRAIT),
	PageSize.EIGHTH: SheetLayout(rows=2, columns=4, sheet_size=A4_LANDSCAPE),
}

PAGE_SIZE_LABELS = {
	PageSize.FULL: "Full page",
	PageSize.HALF: "Half page",
	PageSize.QUARTER: "1/4 page",
	PageSize.EIGHTH: "1/8 page",
}

PAGE_SIZE_VARIANTS = (PageSize.FULL, PageSize.HALF, PageSize.QUARTER, PageSize.EIGHTH)

DEFAULT_TILING = PageSize.HALF


@dataclasses.dataclass
class BookletConfig:
	tiling: PageSize
	padding: float
	add_separators: bool
	reorder_pages: bool
	title: str = DEFAULT_TITLE


@dataclasses.dataclass
class ImpositionResult:
	source_pages: int
	sheets: int
	pages_per_sheet: int
	reordered: bool
	scaling_factor: float


#============================================
def get_sheet_layout(tiling: PageSize) -> SheetLayout:
	"""
	Look up the grid shape and physical sheet for a tiling granularity.

	Args:
		tiling: PageSize variant.

	Returns:
		SheetLayout.
	"""
	return SHEET_LAYOUTS[tiling]


#============================================
def parse_page_size(value: str) -> PageSize:
	"""
	Parse a tiling name like "half" into a PageSize.

	Args:
		value: Tiling name, case insensitive.

	Returns:
		PageSize variant.
	"""
	normalized = value.strip().lower()
	for variant in PAGE_SIZE_VARIANTS:
		if variant.value == normalized:
			return variant
	choices = ", ".join(variant.value for variant in PAGE_SIZE_VARIANTS)
	raise ValueError(f"Unknown tiling '{value}', expected one of: {choices}")


#============================================
def rgba_to_floats(color: tuple[int, int, int, int]) -> tuple[float, float, float, float]:
	"""
	Convert an 8-bit RGBA tuple into 0.0-1.0 floats.

	Args:
		color: Tuple of (r, g, b, a) in 0-255 range.

	Returns:
		Tuple of (r, g, b, a) in 0.0-1.0 range.
	"""
	return tuple(channel / 255.0 for channel in color)
