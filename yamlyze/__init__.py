"""Symbol information for one C/C++ translation unit.

Modules:
- frontend.py: options files, libclang parsing and include reporting.
- walker.py: the single traversal that dispatches declarations.
- locality.py: decides which declarations belong to the target file.
- calls.py: call references attributed to the enclosing function.
- docs.py: raw documentation comments.
- builder.py: the function, variable and type tables.
- model.py: records and the output document.
- document.py: document assembly and YAML/JSON rendering.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .config import AnalysisOptions
from .document import assemble_document, module_name
from .frontend import collect_headers, parse_translation_unit
from .model import SymbolDocument
from .walker import walk_translation_unit


def analyze_file(
	path: str,
	args: Optional[Sequence[str]] = None,
	options: Optional[AnalysisOptions] = None,
) -> SymbolDocument:
	options = options or AnalysisOptions()
	tu = parse_translation_unit(path, args)
	table = walk_translation_unit(tu, path, options)
	headers = collect_headers(tu) if options.includes else []
	return assemble_document(module_name(path), table, headers)


__all__ = [
	"AnalysisOptions",
	"SymbolDocument",
	"analyze_file",
]
