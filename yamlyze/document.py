from __future__ import annotations

import json
import os
import sys
from typing import List, Optional

import yaml

from .builder import SymbolTable
from .model import SymbolDocument

FORMATS = ("yaml", "json")


def module_name(path: str) -> str:
	return path.rsplit("/", 1)[-1]


def assemble_document(name: str, table: SymbolTable, headers: Optional[List[str]] = None) -> SymbolDocument:
	return SymbolDocument(
		name=name,
		functions=table.functions,
		variables=table.variables,
		types=table.types,
		headers=headers or [],
	)


def render(document: SymbolDocument, fmt: str = "yaml") -> str:
	data = document.to_document()
	if fmt == "json":
		return json.dumps(data, indent=2) + "\n"
	if fmt == "yaml":
		return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
	raise ValueError(f"Unknown output format: {fmt}")


def write_document(text: str, output: Optional[str] = None) -> None:
	if not output:
		sys.stdout.write(text)
		return
	parent = os.path.dirname(output)
	if parent:
		os.makedirs(parent, exist_ok=True)
	with open(output, "w", encoding="utf-8") as fh:
		fh.write(text)
