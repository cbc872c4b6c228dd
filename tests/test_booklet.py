import json
import pathlib

import pytest

import pdf_helpers
import songbook_imposer as sbi
import songbook_imposer.booklet
import songbook_imposer.cli
import songbook_imposer.config
import songbook_imposer.impose
import songbook_imposer.merge
import songbook_imposer.reorder


PageSize = sbi.config.PageSize


#============================================
def _sequences() -> list[bytes]:
	"""
	Front matter of 2 pages, a song section of 3 and one back page.
	"""
	return [
		pdf_helpers.build_pdf([300, 310]),
		pdf_helpers.build_pdf([320, 330, 340]),
		pdf_helpers.build_pdf([350]),
	]


#============================================
def test_stages_end_to_end(engine) -> None:
	"""
	Merge, reorder and impose three sequences onto half-page sheets.
	"""
	merged = sbi.merge.merge_documents(engine, _sequences())
	assert merged.page_count == 6

	reordered = sbi.reorder.mix_first_and_last(engine, merged)
	# global indices 0, 5, 1, 4, 2, 3
	assert pdf_helpers.page_widths(reordered) == [300, 350, 310, 340, 320, 330]

	tiled = sbi.impose.tile_pages(engine, reordered, 0.9, True, PageSize.HALF)
	width, height = sbi.config.A4_LANDSCAPE
	pages = pdf_helpers.read_pages(tiled.to_bytes())
	assert len(pages) == 3
	for page in pages:
		vertical, horizontal = pdf_helpers.split_lines(pdf_helpers.collect_lines(page))
		vertical_x = sorted(line[0] for line in vertical)
		assert vertical_x == pytest.approx([0.0, width / 2.0, width], abs=0.01)
		assert sorted(line[1] for line in horizontal) == pytest.approx([0.0, height], abs=0.01)
		translate = pdf_helpers.transform_matrices(page)[0]
		assert translate[4] == pytest.approx(width * 0.05, abs=0.01)
		assert translate[5] == pytest.approx(height * 0.05, abs=0.01)


#============================================
def test_build_booklet_result(engine) -> None:
	config = sbi.config.BookletConfig(
		tiling=PageSize.HALF,
		padding=10.0,
		add_separators=True,
		reorder_pages=True,
		title="Camp songs",
	)
	pdf_bytes, result = sbi.booklet.build_booklet(engine, _sequences(), config)
	assert result.source_pages == 6
	assert result.sheets == 3
	assert result.pages_per_sheet == 2
	assert result.reordered is True
	assert result.scaling_factor == pytest.approx(0.9)
	assert len(pdf_helpers.read_pages(pdf_bytes)) == 3


#============================================
def test_build_booklet_skips_reorder_for_single_page(engine, capsys) -> None:
	config = sbi.config.BookletConfig(
		tiling=PageSize.FULL,
		padding=0.0,
		add_separators=False,
		reorder_pages=True,
	)
	pdf_bytes, result = sbi.booklet.build_booklet(
		engine,
		[pdf_helpers.build_pdf([300])],
		config,
		verbose=True,
	)
	assert result.reordered is False
	assert result.sheets == 1
	assert "Skipping reorder" in capsys.readouterr().out


#============================================
def test_build_booklet_with_no_sequences(engine) -> None:
	config = sbi.config.BookletConfig(
		tiling=PageSize.QUARTER,
		padding=5.0,
		add_separators=True,
		reorder_pages=True,
	)
	pdf_bytes, result = sbi.booklet.build_booklet(engine, [], config)
	assert result.source_pages == 0
	assert result.sheets == 0
	assert pdf_helpers.read_pages(pdf_bytes) == []


#============================================
def test_cli_writes_pdf_and_manifest(tmp_path: pathlib.Path) -> None:
	"""
	Run the CLI pipeline against files on disk.
	"""
	input_paths = []
	for index, buffer in enumerate(_sequences()):
		path = tmp_path / f"sequence_{index}.pdf"
		path.write_bytes(buffer)
		input_paths.append(str(path))
	output_path = tmp_path / "booklet.pdf"

	args = sbi.cli.parse_args(input_paths + ["-o", str(output_path), "-t", "eighth", "-r"])
	config = sbi.cli.build_config(args)
	assert config.tiling is PageSize.EIGHTH
	assert config.add_separators is True
	assert config.reorder_pages is True

	sbi.cli.run_pipeline(args)
	assert len(pdf_helpers.read_pages(output_path.read_bytes())) == 1

	manifest = json.loads((tmp_path / "booklet.pdf.json").read_text(encoding="utf-8"))
	assert manifest["source_pages"] == 6
	assert manifest["sheets"] == 1
	assert manifest["layout"]["rows"] == 2
	assert manifest["layout"]["columns"] == 4
	assert manifest["reordered"] is True


#============================================
def test_parse_page_size() -> None:
	assert sbi.config.parse_page_size(" Quarter ") is PageSize.QUARTER
	assert str(PageSize.EIGHTH) == "1/8 page"
	with pytest.raises(ValueError):
		sbi.config.parse_page_size("sixteenth")


#============================================
def test_cli_rejects_out_of_range_padding(capsys) -> None:
	with pytest.raises(SystemExit):
		sbi.cli.parse_args(["songs.pdf", "-o", "booklet.pdf", "-p", "150"])
	assert "--padding" in capsys.readouterr().err
