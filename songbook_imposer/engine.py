"""
PDF engine context and the Document/Page wrappers the stages work on.
"""

# Standard Library
import io

# PIP3 modules
import pypdf
import pypdf.errors
import pypdf.generic
import reportlab.pdfgen.canvas

# local repo modules
import songbook_imposer as sbi
import songbook_imposer.config
import songbook_imposer.errors


DeserializationError = sbi.errors.DeserializationError
EngineClosedError = sbi.errors.EngineClosedError

SEPARATOR_WIDTH = sbi.config.SEPARATOR_WIDTH
SEPARATOR_COLOR = sbi.config.SEPARATOR_COLOR

# pypdf raises plain lookup and value errors on some malformed input.
PDF_ERRORS = (pypdf.errors.PyPdfError, ValueError, KeyError, IndexError)


class PdfEngine:
	"""
	Process-scoped handle every Document is created or loaded through.

	Acquire it once, pass it into every stage, close it at shutdown.
	"""

	def __init__(self) -> None:
		self._closed = False

	def __enter__(self) -> "PdfEngine":
		return self

	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.close()

	@property
	def closed(self) -> bool:
		return self._closed

	def close(self) -> None:
		self._closed = True

	def require_open(self) -> None:
		if self._closed:
			raise EngineClosedError("PDF engine has been closed")

	#============================================
	def create_document(self, title: str | None = None) -> "Document":
		"""
		Create a new, empty document.

		Args:
			title: Optional document title.

		Returns:
			Document with no pages.
		"""
		self.require_open()
		document = Document(self, pypdf.PdfWriter())
		if title is not None:
			document.title = title
		return document

	#============================================
	def load_document(self, buffer: bytes, position: int = 0) -> "Document":
		"""
		Deserialize a PDF byte buffer into a document.

		Args:
			buffer: Serialized PDF.
			position: Index of the buffer in its input list, used in errors.

		Returns:
			Document holding the buffer's pages in their original order.
		"""
		self.require_open()
		try:
			reader = pypdf.PdfReader(io.BytesIO(buffer))
			# touch the page tree so broken files fail here and not later
			len(reader.pages)
			writer = pypdf.PdfWriter(clone_from=reader)
		except PDF_ERRORS as error:
			raise DeserializationError(str(error), position) from error
		return Document(self, writer)


class Page:
	"""
	A single page of a Document. Geometry changes apply in place.
	"""

	def __init__(self, document: "Document", index: int, page: pypdf.PageObject) -> None:
		self.document = document
		self.index = index
		self._page = page

	@property
	def page_object(self) -> pypdf.PageObject:
		return self._page

	@property
	def width(self) -> float:
		return float(self._page.mediabox.width)

	@property
	def height(self) -> float:
		return float(self._page.mediabox.height)

	#============================================
	def _transform(self, transformation: pypdf.Transformation) -> None:
		"""
		Apply a transformation to the content stream and every annotation rect.

		Args:
			transformation: pypdf transformation.
		"""
		self.document.engine.require_open()
		self._page.add_transformation(transformation)
		for annotation in self._page.get("/Annots", []):
			annotation = annotation.get_object()
			if "/Rect" not in annotation:
				continue
			x0, y0, x1, y1 = [float(value) for value in annotation["/Rect"]]
			corners = [transformation.apply_on((x, y)) for x, y in ((x0, y0), (x1, y1))]
			xs = [corner[0] for corner in corners]
			ys = [corner[1] for corner in corners]
			annotation[pypdf.generic.NameObject("/Rect")] = pypdf.generic.RectangleObject(
				[min(xs), min(ys), max(xs), max(ys)]
			)

	def scale(self, sx: float, sy: float) -> None:
		"""
		Scale the page content and annotations about the origin.

		The sheet bounds stay fixed.
		"""
		self._transform(pypdf.Transformation().scale(sx, sy))

	def translate(self, dx: float, dy: float) -> None:
		self._transform(pypdf.Transformation().translate(dx, dy))

	#============================================
	def draw_lines(
		self,
		lines: list[tuple[float, float, float, float]],
		color: tuple[int, int, int, int] = SEPARATOR_COLOR,
		line_width: float = SEPARATOR_WIDTH,
	) -> None:
		"""
		Draw straight lines on top of the existing page content.

		Args:
			lines: List of (x1, y1, x2, y2) in page coordinates.
			color: Stroke color as 8-bit RGBA.
			line_width: Stroke width in points.
		"""
		self.document.engine.require_open()
		if not lines:
			return
		red, green, blue, alpha = sbi.config.rgba_to_floats(color)
		buffer = io.BytesIO()
		pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(self.width, self.height))
		pdf.setLineWidth(line_width)
		pdf.setStrokeColorRGB(red, green, blue)
		if alpha < 1.0:
			pdf.setStrokeAlpha(alpha)
		for x1, y1, x2, y2 in lines:
			pdf.line(x1, y1, x2, y2)
		pdf.save()
		buffer.seek(0)
		overlay = pypdf.PdfReader(buffer).pages[0]
		self._page.merge_page(overlay)

	def draw_line(
		self,
		x1: float,
		y1: float,
		x2: float,
		y2: float,
		color: tuple[int, int, int, int] = SEPARATOR_COLOR,
		line_width: float = SEPARATOR_WIDTH,
	) -> None:
		self.draw_lines([(x1, y1, x2, y2)], color, line_width)

	#============================================
	def place_page(self, source: "Page", scale: float, x: float, y: float) -> None:
		"""
		Draw another page's content onto this page.

		Args:
			source: Page to draw; its media box origin is moved to (x, y).
			scale: Uniform scale applied to the source content.
			x: Target x of the source's lower-left corner.
			y: Target y of the source's lower-left corner.
		"""
		self.document.engine.require_open()
		mediabox = source.page_object.mediabox
		transform = pypdf.Transformation().translate(
			-float(mediabox.left),
			-float(mediabox.bottom),
		).scale(scale, scale).translate(x, y)
		self._page.merge_transformed_page(source.page_object, transform)


class Document:
	"""
	Ordered pages plus document metadata, backed by a pypdf writer.
	"""

	def __init__(self, engine: PdfEngine, writer: pypdf.PdfWriter) -> None:
		self.engine = engine
		self._writer = writer
		self._title = None

	def __len__(self) -> int:
		return self.page_count

	def __iter__(self):
		for index in range(self.page_count):
			yield self.get_page(index)

	@property
	def page_count(self) -> int:
		return len(self._writer.pages)

	@property
	def title(self) -> str | None:
		return self._title

	@title.setter
	def title(self, value: str) -> None:
		self._title = value
		self._writer.add_metadata({"/Title": value})

	def get_page(self, index: int) -> Page:
		self.engine.require_open()
		if not 0 <= index < self.page_count:
			raise IndexError(f"page index {index} out of range for {self.page_count} pages")
		return Page(self, index, self._writer.pages[index])

	def add_blank_page(self, width: float, height: float) -> Page:
		self.engine.require_open()
		page = self._writer.add_blank_page(width=width, height=height)
		return Page(self, self.page_count - 1, page)

	#============================================
	def append(self, other: "Document") -> None:
		"""
		Append every page of another document, in order, at the end.

		Args:
			other: Source document; it is not modified.
		"""
		self.engine.require_open()
		for page in other._writer.pages:
			self._writer.add_page(page)

	#============================================
	def copy_page_from(self, source: "Document", index: int, dest_index: int) -> Page:
		"""
		Copy one page of another document into this one.

		Args:
			source: Source document.
			index: Page index in the source.
			dest_index: Position of the copy in this document.

		Returns:
			The inserted Page.
		"""
		self.engine.require_open()
		if not 0 <= index < source.page_count:
			raise IndexError(f"source page {index} out of range for {source.page_count} pages")
		if not 0 <= dest_index <= self.page_count:
			raise IndexError(f"destination {dest_index} out of range for {self.page_count} pages")
		page = self._writer.insert_page(source._writer.pages[index], dest_index)
		return Page(self, dest_index, page)

	def to_bytes(self) -> bytes:
		self.engine.require_open()
		buffer = io.BytesIO()
		self._writer.write(buffer)
		return buffer.getvalue()
