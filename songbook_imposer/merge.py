"""
Merge independently rendered page sequences into one document.
"""

# local repo modules
import songbook_imposer as sbi
import songbook_imposer.engine
import songbook_imposer.errors


PdfEngine = sbi.engine.PdfEngine
Document = sbi.engine.Document
AppendError = sbi.errors.AppendError
PDF_ERRORS = sbi.engine.PDF_ERRORS


#============================================
def merge_documents(engine: PdfEngine, page_buffers: list[bytes]) -> Document:
	"""
	Concatenate serialized PDFs into one document, keeping their order.

	Every buffer is deserialized before anything is appended, so a bad input
	aborts the merge without a partial result.

	Args:
		engine: PDF engine context.
		page_buffers: Serialized single documents in book order.

	Returns:
		Merged Document. An empty list yields an empty document.
	"""
	if not page_buffers:
		return engine.create_document()
	if len(page_buffers) == 1:
		return engine.load_document(page_buffers[0], 0)

	documents = [
		engine.load_document(buffer, position)
		for position, buffer in enumerate(page_buffers)
	]
	merged = engine.create_document()
	for position, document in enumerate(documents):
		try:
			merged.append(document)
		except PDF_ERRORS as error:
			raise AppendError(str(error), position, merged.page_count) from error
	return merged
