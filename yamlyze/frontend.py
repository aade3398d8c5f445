from __future__ import annotations

import logging
from ctypes import c_int, c_void_p
from typing import List, Optional, Sequence

from clang.cindex import Diagnostic, Index, TranslationUnit, TranslationUnitLoadError, conf

from .errors import OptionsFileError, ParseError
from .locality import canonical_path

log = logging.getLogger(__name__)

# Turns warnings into fatal diagnostics, which stops libclang short of a tree.
DROPPED_OPTIONS = frozenset({"-Werror"})


def split_options(text: str) -> List[str]:
	args: List[str] = []
	for token in text.split():
		token = token.replace('\\"', '"')
		if token and token not in DROPPED_OPTIONS:
			args.append(token)
	return args


def read_options_file(path: str) -> List[str]:
	"""Compiler arguments from a whitespace separated options file."""
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as e:
		raise OptionsFileError(path, e.strerror or str(e)) from e
	except UnicodeDecodeError as e:
		raise OptionsFileError(path, "not UTF-8 text") from e
	args = split_options(text)
	log.debug("Loaded %d compiler arguments from %s", len(args), path)
	return args


def parse_translation_unit(
	path: str,
	args: Optional[Sequence[str]] = None,
	index: Optional[Index] = None,
) -> TranslationUnit:
	target = canonical_path(path)
	try:
		with open(target, "rb") as fh:
			source = fh.read()
	except OSError as e:
		raise ParseError(target, "Could not read file") from e

	index = index or Index.create()
	try:
		tu = index.parse(
			target,
			args=list(args or []),
			unsaved_files=[(target, source)],
		)
	except TranslationUnitLoadError as e:
		raise ParseError(target, "Failed to parse the file") from e
	if tu is None:
		raise ParseError(target, "Failed to parse the file")

	for diag in tu.diagnostics:
		if diag.severity >= Diagnostic.Error:
			log.warning("%s", diag)
	return tu


def collect_headers(tu: TranslationUnit) -> List[str]:
	"""Files included directly by the main file, in inclusion order."""
	headers: List[str] = []
	seen = set()
	for inclusion in tu.get_includes():
		if inclusion.depth != 1:
			continue
		name = inclusion.include.name
		if name not in seen:
			seen.add(name)
			headers.append(name)
	return headers


def pointer_size(tu: TranslationUnit) -> int:
	"""Size in bytes of a data pointer on the translation unit's target."""
	lib = conf.lib
	get_info = lib.clang_getTranslationUnitTargetInfo
	get_info.argtypes = [c_void_p]
	get_info.restype = c_void_p
	get_width = lib.clang_TargetInfo_getPointerWidth
	get_width.argtypes = [c_void_p]
	get_width.restype = c_int
	dispose = lib.clang_TargetInfo_dispose
	dispose.argtypes = [c_void_p]
	dispose.restype = None

	info = get_info(tu)
	try:
		bits = get_width(info)
	finally:
		dispose(info)
	if bits <= 0:
		raise ParseError(tu.spelling, "Could not determine the target pointer width")
	return bits // 8
