from __future__ import annotations

import os
from typing import Dict, Optional


def canonical_path(path: str) -> str:
	"""Absolute path with symlinks resolved; the file need not exist."""
	return os.path.normcase(os.path.realpath(os.path.abspath(path)))


class LocalityFilter:
	"""Decides whether a declaration belongs to the module under analysis."""

	def __init__(self, target_path: str, all_files: bool = False):
		self.target = canonical_path(target_path)
		self.all_files = all_files
		self._canonical: Dict[str, str] = {}

	def included(self, file_name: Optional[str], in_system_header: bool) -> bool:
		if not file_name or in_system_header:
			return False
		if self.all_files:
			return True
		resolved = self._canonical.get(file_name)
		if resolved is None:
			resolved = canonical_path(file_name)
			self._canonical[file_name] = resolved
		return resolved == self.target

	def accepts(self, cursor) -> bool:
		location = cursor.location
		if location.file is None:
			return False
		return self.included(location.file.name, location.is_in_system_header)
