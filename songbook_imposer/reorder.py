"""
Signature reordering for booklet printing.
"""

# local repo modules
import songbook_imposer as sbi
import songbook_imposer.engine
import songbook_imposer.errors


PdfEngine = sbi.engine.PdfEngine
Document = sbi.engine.Document
CopyError = sbi.errors.CopyError
PreconditionViolation = sbi.errors.PreconditionViolation
PDF_ERRORS = sbi.engine.PDF_ERRORS


#============================================
def signature_order(page_count: int) -> list[int]:
	"""
	Page indices in first, last, second, second-to-last, ... order.

	Args:
		page_count: Number of pages, at least two.

	Returns:
		List of source page indices.
	"""
	if page_count <= 1:
		raise PreconditionViolation(f"reordering needs more than one page, got {page_count}")
	order = []
	front_index = 0
	back_index = page_count - 1
	while True:
		order.append(front_index)
		front_index += 1
		if front_index > back_index:
			break
		order.append(back_index)
		back_index -= 1
		if front_index > back_index:
			break
	return order


#============================================
def mix_first_and_last(engine: PdfEngine, document: Document) -> Document:
	"""
	Build a new document with pages interleaved from both ends.

	For pages 0..N-1 the result is 0, N-1, 1, N-2, 2, ... so that sheets
	cut and stacked in imposition order read correctly once folded.

	Args:
		engine: PDF engine context.
		document: Linear document with more than one page.

	Returns:
		New reordered Document; the input is left untouched.
	"""
	order = signature_order(document.page_count)
	reordered = engine.create_document(title=document.title)
	for source_index in order:
		target_index = reordered.page_count
		try:
			reordered.copy_page_from(document, source_index, target_index)
		except PDF_ERRORS as error:
			raise CopyError(str(error), source_index, target_index) from error
	return reordered
