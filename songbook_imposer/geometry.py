"""
Pure geometry for grid tiling, page scaling and separator placement.
"""

# local repo modules
import songbook_imposer as sbi
import songbook_imposer.errors


GeometryError = sbi.errors.GeometryError


#============================================
def _require_positive(**values: float) -> None:
	for name, value in values.items():
		if value <= 0:
			raise GeometryError(f"{name} must be positive, got {value}")


#============================================
def cell_scale(scaling_factor: float) -> float:
	"""
	Return the scaling factor applied to every tiled sheet.

	The factor is chosen by the caller; it is not derived from the grid shape.

	Args:
		scaling_factor: Factor in the (0, 1] range.

	Returns:
		The same factor.
	"""
	if not 0.0 < scaling_factor <= 1.0:
		raise GeometryError(f"scaling factor must be in (0, 1], got {scaling_factor}")
	return scaling_factor


#============================================
def padding_to_scale(padding: float) -> float:
	"""
	Convert a padding percentage into a scaling factor.

	Args:
		padding: Padding in percent of the sheet, 0 <= padding < 100.

	Returns:
		Scaling factor.
	"""
	if not 0.0 <= padding < 100.0:
		raise ValueError(f"padding must be in [0, 100), got {padding}")
	return 1.0 - padding / 100.0


#============================================
def centering_offset(scaling_factor: float) -> float:
	"""
	Fraction of the sheet left as margin on each side after scaling.
	"""
	return (1.0 - cell_scale(scaling_factor)) / 2.0


#============================================
def centering_translation(width: float, height: float, scaling_factor: float) -> tuple[float, float]:
	"""
	Compute the translation that re-centers scaled content on its sheet.

	Args:
		width: Sheet width read after scaling.
		height: Sheet height read after scaling.
		scaling_factor: Factor the content was scaled by.

	Returns:
		Tuple of (dx, dy).
	"""
	_require_positive(width=width, height=height)
	offset = centering_offset(scaling_factor)
	return (width * offset, height * offset)


#============================================
def scaled_content_box(
	width: float,
	height: float,
	scaling_factor: float,
) -> tuple[float, float, float, float]:
	"""
	Bounding box of a full sheet of content after scale and re-centering.

	Args:
		width: Sheet width.
		height: Sheet height.
		scaling_factor: Content scaling factor.

	Returns:
		Tuple of (x0, y0, x1, y1).
	"""
	dx, dy = centering_translation(width, height, scaling_factor)
	return (dx, dy, width * scaling_factor + dx, height * scaling_factor + dy)


#============================================
def separator_lines(
	rows: int,
	columns: int,
	width: float,
	height: float,
) -> list[tuple[float, float, float, float]]:
	"""
	Enumerate the separator lines that fall on every cell boundary.

	Vertical lines come first, left to right, then horizontal lines from the
	bottom edge up. Each line spans the full opposite dimension.

	Args:
		rows: Grid rows.
		columns: Grid columns.
		width: Sheet width.
		height: Sheet height.

	Returns:
		List of (x1, y1, x2, y2) tuples.
	"""
	_require_positive(rows=rows, columns=columns, width=width, height=height)
	lines = []
	for index in range(columns + 1):
		x = width * (index / columns)
		lines.append((x, 0.0, x, height))
	for index in range(rows + 1):
		y = height * (index / rows)
		lines.append((0.0, y, width, y))
	return lines


#============================================
def cell_origin(
	slot: int,
	rows: int,
	columns: int,
	sheet_width: float,
	sheet_height: float,
) -> tuple[float, float, float, float]:
	"""
	Compute the cell box for a slot on a sheet.

	Slots fill row-major, left to right then top to bottom, with the PDF
	origin at the bottom-left corner.

	Args:
		slot: Slot index on the sheet.
		rows: Grid rows.
		columns: Grid columns.
		sheet_width: Sheet width.
		sheet_height: Sheet height.

	Returns:
		Tuple of (cell_x, cell_y, cell_width, cell_height).
	"""
	_require_positive(rows=rows, columns=columns, sheet_width=sheet_width, sheet_height=sheet_height)
	cell_width = sheet_width / columns
	cell_height = sheet_height / rows
	row = slot // columns
	col = slot % columns
	cell_x = col * cell_width
	cell_y = sheet_height - (row + 1) * cell_height
	return (cell_x, cell_y, cell_width, cell_height)


#============================================
def fit_into_cell(
	page_width: float,
	page_height: float,
	cell_width: float,
	cell_height: float,
) -> tuple[float, float, float]:
	"""
	Scale a page uniformly to fit a cell and center it there.

	Args:
		page_width: Source page width.
		page_height: Source page height.
		cell_width: Cell width.
		cell_height: Cell height.

	Returns:
		Tuple of (scale, x_offset, y_offset) relative to the cell origin.
	"""
	_require_positive(
		page_width=page_width,
		page_height=page_height,
		cell_width=cell_width,
		cell_height=cell_height,
	)
	scale = min(cell_width / page_width, cell_height / page_height)
	x_offset = (cell_width - page_width * scale) / 2.0
	y_offset = (cell_height - page_height * scale) / 2.0
	return (scale, x_offset, y_offset)
