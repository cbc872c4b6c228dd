"""
End-to-end booklet pipeline: merge, reorder, tile, serialize.
"""

# Standard Library
import json
import pathlib

# local repo modules
import songbook_imposer as sbi
import songbook_imposer.config
import songbook_imposer.engine
import songbook_imposer.geometry
import songbook_imposer.impose
import songbook_imposer.merge
import songbook_imposer.reorder


PdfEngine = sbi.engine.PdfEngine
BookletConfig = sbi.config.BookletConfig
ImpositionResult = sbi.config.ImpositionResult


#============================================
def build_booklet(
	engine: PdfEngine,
	page_buffers: list[bytes],
	config: BookletConfig,
	verbose: bool = False,
) -> tuple[bytes, ImpositionResult]:
	"""
	Assemble rendered page sequences into a print-ready tiled PDF.

	Reordering is skipped for documents with fewer than two pages.

	Args:
		engine: PDF engine context.
		page_buffers: Serialized page sequences in book order.
		config: Booklet configuration.
		verbose: Print stage progress.

	Returns:
		Tuple of (pdf_bytes, ImpositionResult).
	"""
	scaling_factor = sbi.geometry.padding_to_scale(config.padding)
	layout = sbi.config.get_sheet_layout(config.tiling)

	document = sbi.merge.merge_documents(engine, page_buffers)
	document.title = config.title
	source_pages = document.page_count
	if verbose:
		print(f"Merged {len(page_buffers)} page sequences into {source_pages} pages")

	reordered = False
	if config.reorder_pages:
		if source_pages > 1:
			document = sbi.reorder.mix_first_and_last(engine, document)
			reordered = True
			if verbose:
				print("Pages reordered for printing")
		elif verbose:
			print(f"Skipping reorder for a {source_pages} page document")

	tiled = sbi.impose.tile_pages(
		engine,
		document,
		scaling_factor,
		config.add_separators,
		config.tiling,
	)
	if verbose:
		print(f"Tiled onto {tiled.page_count} sheets ({config.tiling.label})")

	result = ImpositionResult(
		source_pages=source_pages,
		sheets=tiled.page_count,
		pages_per_sheet=layout.pages_per_sheet,
		reordered=reordered,
		scaling_factor=scaling_factor,
	)
	return (tiled.to_bytes(), result)


#============================================
def write_booklet(
	engine: PdfEngine,
	input_paths: list[pathlib.Path],
	output_path: pathlib.Path,
	config: BookletConfig,
	verbose: bool = False,
) -> ImpositionResult:
	"""
	Read page sequence PDFs, build the booklet and write it to disk.

	Args:
		engine: PDF engine context.
		input_paths: Page sequence PDF paths in book order.
		output_path: Output PDF path.
		config: Booklet configuration.
		verbose: Print stage progress.

	Returns:
		ImpositionResult.
	"""
	page_buffers = [path.read_bytes() for path in input_paths]
	pdf_bytes, result = build_booklet(engine, page_buffers, config, verbose=verbose)
	output_path.write_bytes(pdf_bytes)
	return result


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	inputs: list[pathlib.Path],
	result: ImpositionResult,
	config: BookletConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		inputs: Input page sequence files.
		result: Imposition result.
		config: Booklet configuration.
	"""
	layout = sbi.config.get_sheet_layout(config.tiling)
	data = {
		"inputs": [str(path) for path in inputs],
		"source_pages": result.source_pages,
		"sheets": result.sheets,
		"pages_per_sheet": result.pages_per_sheet,
		"reordered": result.reordered,
		"layout": {
			"tiling": config.tiling.value,
			"rows": layout.rows,
			"columns": layout.columns,
			"sheet_width": layout.sheet_size[0],
			"sheet_height": layout.sheet_size[1],
			"padding": config.padding,
			"scaling_factor": result.scaling_factor,
			"add_separators": config.add_separators,
			"reorder_pages": config.reorder_pages,
		},
		"title": config.title,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
