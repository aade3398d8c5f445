from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from yamlyze import analyze_file
from yamlyze.config import AnalysisOptions
from yamlyze.document import FORMATS, render, write_document
from yamlyze.errors import YamlyzeError
from yamlyze.frontend import read_options_file


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="yamlyze",
		description="Creates a YAML representation of C/C++ source files",
	)
	parser.add_argument("-f", "--file", help="Source/header file")
	parser.add_argument("-o", "--options", help="Compile options file")
	parser.add_argument("-i", "--includes", action="store_true", help="Report included files")
	parser.add_argument("-c", "--calls", action="store_true", help="Report function calls")
	parser.add_argument("-d", "--docs", action="store_true", help="Report Doxygen comments")
	parser.add_argument("-a", "--all", action="store_true", help="Analyze all included files")
	parser.add_argument("-H", "--header", action="store_true", help="Process as a header file")
	parser.add_argument("-O", "--output", default="", help="Save output to file")
	parser.add_argument("-F", "--format", choices=FORMATS, default="yaml", help="Output format")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
	return parser


def configure_logging(verbose: bool) -> None:
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.WARNING,
		format="[%(levelname)-8s] [%(name)s] %(message)s",
		stream=sys.stderr,
	)


def cmd_analyze(args: argparse.Namespace) -> None:
	compiler_args: List[str] = []
	if args.options:
		compiler_args = read_options_file(args.options)

	options = AnalysisOptions(
		calls=args.calls,
		docs=args.docs,
		all_files=args.all,
		header=args.header,
		includes=args.includes,
	)
	document = analyze_file(args.file, compiler_args, options)
	write_document(render(document, args.format), args.output)


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)

	if not args.file:
		parser.print_help()
		return 0

	configure_logging(args.verbose)
	try:
		cmd_analyze(args)
	except YamlyzeError as e:
		print(f"Error: {e}", file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
