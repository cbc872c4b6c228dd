import fitz
import PIL.Image

import pdf_helpers
import songbook_imposer as sbi
import songbook_imposer.config
import songbook_imposer.impose
import songbook_imposer.merge


DPI = 144
INK_THRESHOLD = 200
SCALING_FACTOR = 0.9


#============================================
def _render_pdf_first_page(pdf_bytes: bytes) -> PIL.Image.Image:
	"""
	Render the first page of a PDF to an image.

	Args:
		pdf_bytes: Serialized PDF.

	Returns:
		PIL image.
	"""
	document = fitz.open(stream=pdf_bytes, filetype="pdf")
	page = document[0]
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	pixmap = page.get_pixmap(matrix=matrix, alpha=False)
	image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	document.close()
	return image


#============================================
def _count_ink_ratio(gray: PIL.Image.Image, threshold: int) -> float:
	"""
	Compute the ink ratio for a grayscale strip.

	Args:
		gray: Grayscale image region.
		threshold: Pixel intensity threshold.

	Returns:
		Ink ratio.
	"""
	pixels = list(gray.getdata())
	if not pixels:
		return 0.0
	ink = sum(1 for value in pixels if value < threshold)
	return ink / len(pixels)


#============================================
def _rows_with_ink(gray: PIL.Image.Image, threshold: int) -> float:
	"""
	Fraction of pixel rows in a strip that contain at least one inked pixel.
	"""
	width, height = gray.size
	pixels = list(gray.getdata())
	inked_rows = 0
	for row in range(height):
		row_pixels = pixels[row * width:(row + 1) * width]
		if min(row_pixels) < threshold:
			inked_rows += 1
	return inked_rows / height


#============================================
def test_rendered_half_sheet_margins_and_separators(engine) -> None:
	"""
	Smoke test a half-page sheet: clear margins, separators on cell boundaries.
	"""
	blank_pages = pdf_helpers.build_pdf([420, 420], height=595, draw_labels=False)
	document = sbi.merge.merge_documents(engine, [blank_pages])
	tiled = sbi.impose.tile_pages(
		engine,
		document,
		SCALING_FACTOR,
		True,
		sbi.config.PageSize.HALF,
	)

	image = _render_pdf_first_page(tiled.to_bytes())
	gray = image.convert("L")
	width, height = gray.size
	margin = (1.0 - SCALING_FACTOR) / 2.0

	# outside the scaled content there is nothing but paper
	margin_x = int(width * margin * 0.8)
	margin_y = int(height * margin * 0.8)
	strips = {
		"left": gray.crop((0, 0, margin_x, height)),
		"right": gray.crop((width - margin_x, 0, width, height)),
		"top": gray.crop((0, 0, width, margin_y)),
		"bottom": gray.crop((0, height - margin_y, width, height)),
	}
	for name, strip in strips.items():
		assert _count_ink_ratio(strip, INK_THRESHOLD) == 0.0, name

	# the middle separator stays on the center line after scaling
	top = int(height * 0.2)
	bottom = int(height * 0.8)
	center_x = width // 2
	center_strip = gray.crop((center_x - 3, top, center_x + 3, bottom))
	assert _rows_with_ink(center_strip, INK_THRESHOLD) > 0.9

	# the outer separators sit on the margin boundary
	left_x = int(round(width * margin))
	left_strip = gray.crop((left_x - 3, top, left_x + 3, bottom))
	assert _rows_with_ink(left_strip, INK_THRESHOLD) > 0.9

	# between separators the cells of blank pages are empty
	cell_x = int(width * 0.3)
	cell_strip = gray.crop((cell_x - 3, top, cell_x + 3, bottom))
	assert _count_ink_ratio(cell_strip, INK_THRESHOLD) == 0.0
