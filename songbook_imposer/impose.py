"""
N-up tiling of logical pages onto physical sheets.
"""

# local repo modules
import songbook_imposer as sbi
import songbook_imposer.config
import songbook_imposer.engine
import songbook_imposer.errors
import songbook_imposer.geometry


PdfEngine = sbi.engine.PdfEngine
Document = sbi.engine.Document
PageSize = sbi.config.PageSize
GeometryError = sbi.errors.GeometryError
PDF_ERRORS = sbi.engine.PDF_ERRORS
PAGE_ERRORS = (GeometryError,) + PDF_ERRORS


#============================================
def _page_error(error: Exception, page_index: int, operation: str) -> GeometryError:
	detail = error.detail if isinstance(error, GeometryError) else str(error)
	return GeometryError(detail, page_index=page_index, operation=operation)


#============================================
def tile_into_new_document(
	engine: PdfEngine,
	document: Document,
	rows: int,
	columns: int,
	sheet_size: tuple[float, float],
) -> Document:
	"""
	Lay out pages on sheets in a rows x columns grid.

	Each page is scaled to fit its cell and centered there. Cells fill left
	to right, then top to bottom; a short final sheet keeps empty cells.

	Args:
		engine: PDF engine context.
		document: Source pages.
		rows: Grid rows per sheet.
		columns: Grid columns per sheet.
		sheet_size: Tuple of (width, height) for every sheet.

	Returns:
		New Document with ceil(pages / (rows * columns)) sheets.
	"""
	sheet_width, sheet_height = sheet_size
	pages_per_sheet = rows * columns
	tiled = engine.create_document(title=document.title)
	sheet = None
	for index, source in enumerate(document):
		slot = index % pages_per_sheet
		if slot == 0:
			sheet = tiled.add_blank_page(sheet_width, sheet_height)
		operation = "grid placement"
		try:
			if source.page_object.rotation:
				source.page_object.transfer_rotation_to_content()
			cell_x, cell_y, cell_width, cell_height = sbi.geometry.cell_origin(
				slot,
				rows,
				columns,
				sheet_width,
				sheet_height,
			)
			scale, x_offset, y_offset = sbi.geometry.fit_into_cell(
				source.width,
				source.height,
				cell_width,
				cell_height,
			)
			sheet.place_page(source, scale, cell_x + x_offset, cell_y + y_offset)
		except PAGE_ERRORS as error:
			raise _page_error(error, index, operation) from error
	return tiled


#============================================
def tile_pages(
	engine: PdfEngine,
	document: Document,
	scaling_factor: float,
	add_separators: bool,
	tiling: PageSize,
) -> Document:
	"""
	Impose pages onto sheets, shrink each sheet and draw cell separators.

	Per sheet the order is fixed: separators are drawn in the unscaled
	sheet coordinates, the content is scaled, then it is translated by the
	sheet size read after scaling so a margin of (1 - factor) / 2 remains
	on every side.

	Args:
		engine: PDF engine context.
		document: Pages to impose, in reading order.
		scaling_factor: Factor in the (0, 1] range.
		add_separators: Draw lines on every cell boundary.
		tiling: Tiling granularity.

	Returns:
		New tiled Document.
	"""
	scaling_factor = sbi.geometry.cell_scale(scaling_factor)
	layout = sbi.config.get_sheet_layout(tiling)
	tiled = tile_into_new_document(
		engine,
		document,
		layout.rows,
		layout.columns,
		layout.sheet_size,
	)

	for page in tiled:
		operation = "read size"
		try:
			page_width, page_height = page.width, page.height
			if add_separators:
				operation = "draw separators"
				lines = sbi.geometry.separator_lines(
					layout.rows,
					layout.columns,
					page_width,
					page_height,
				)
				page.draw_lines(lines)
			operation = "scale"
			page.scale(scaling_factor, scaling_factor)
			operation = "translate"
			dx, dy = sbi.geometry.centering_translation(page.width, page.height, scaling_factor)
			page.translate(dx, dy)
		except PAGE_ERRORS as error:
			raise _page_error(error, page.index, operation) from error
	return tiled
