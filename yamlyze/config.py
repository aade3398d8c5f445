from __future__ import annotations

from pydantic import BaseModel


class AnalysisOptions(BaseModel):
	"""Switches controlling what a traversal records.

	- calls: attribute call expressions to the enclosing function.
	- docs: attach raw documentation comments to functions and types.
	- all_files: accept declarations from every non-system file.
	- header: keep function declarations that have no body.
	- includes: report the files included directly by the target.
	"""

	calls: bool = False
	docs: bool = False
	all_files: bool = False
	header: bool = False
	includes: bool = False
