"""
CLI entry points for songbook booklet imposition.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import songbook_imposer as sbi
import songbook_imposer.booklet
import songbook_imposer.config
import songbook_imposer.engine


BookletConfig = sbi.config.BookletConfig

DEFAULT_PADDING = sbi.config.DEFAULT_PADDING
DEFAULT_TILING = sbi.config.DEFAULT_TILING
DEFAULT_TITLE = sbi.config.DEFAULT_TITLE


#============================================
def build_config(args: argparse.Namespace) -> BookletConfig:
	"""
	Build booklet config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		BookletConfig.
	"""
	config = BookletConfig(
		tiling=sbi.config.parse_page_size(args.tiling),
		padding=args.padding,
		add_separators=args.add_separators,
		reorder_pages=args.reorder_pages,
		title=args.title,
	)
	return config


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Impose songbook page sequences onto printable sheets.")
	parser.add_argument("inputs", nargs="+", help="Page sequence PDFs in book order.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("--title", dest="title", default=DEFAULT_TITLE, help="Document title.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument(
		"-t",
		"--tiling",
		dest="tiling",
		default=DEFAULT_TILING.value,
		choices=[variant.value for variant in sbi.config.PAGE_SIZE_VARIANTS],
		help="Pages per sheet: full=1, half=2, quarter=4, eighth=8.",
	)
	layout_group.add_argument(
		"-p",
		"--padding",
		dest="padding",
		type=float,
		default=DEFAULT_PADDING,
		help="Margin around each sheet in percent.",
	)

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-s", "--separators", dest="add_separators", action="store_true", help="Draw cut lines between pages.")
	behavior_group.add_argument("-S", "--no-separators", dest="add_separators", action="store_false", help="Disable cut lines.")
	behavior_group.add_argument("-r", "--reorder", dest="reorder_pages", action="store_true", help="Reorder pages for booklet printing.")
	behavior_group.add_argument("-R", "--no-reorder", dest="reorder_pages", action="store_false", help="Keep reading order.")

	parser.set_defaults(
		add_separators=True,
		reorder_pages=False,
	)

	args = parser.parse_args(argv)
	if not 0.0 <= args.padding < 100.0:
		parser.error(f"--padding must be in [0, 100), got {args.padding}")
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from page sequence PDFs to the tiled booklet.

	Args:
		args: Parsed argparse namespace.
	"""
	config = build_config(args)
	print("Songbook imposition pipeline")
	print(f"Output PDF: {args.output_path}")
	if args.manifest_path:
		print(f"Manifest: {args.manifest_path}")
	print(f"Tiling: {config.tiling.label}")
	print(f"Padding: {config.padding}%")
	print(f"Separators: {config.add_separators}")
	print(f"Reorder pages: {config.reorder_pages}")

	input_paths = [pathlib.Path(path) for path in args.inputs]
	print(f"Page sequences: {len(input_paths)}")

	output_path = pathlib.Path(args.output_path)
	start_time = time.perf_counter()
	with sbi.engine.PdfEngine() as engine:
		result = sbi.booklet.write_booklet(engine, input_paths, output_path, config, verbose=True)
	total_time = time.perf_counter() - start_time
	print(f"Source pages: {result.source_pages}")
	print(f"Sheets written: {result.sheets}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	sbi.booklet.write_manifest(pathlib.Path(manifest_path), input_paths, result, config)
	print(f"Timing: total={total_time:.2f}s")
	print(f"Manifest written: {manifest_path}")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
