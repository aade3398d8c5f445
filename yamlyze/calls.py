from __future__ import annotations

import logging
from typing import Optional

from clang.cindex import Cursor, CursorKind

from .builder import SymbolTable

log = logging.getLogger(__name__)

# Declarations a call expression may name directly. Constructors are left out:
# the front-end reports construct expressions as calls, but they are not.
CALLABLE_KINDS = frozenset(
	{
		CursorKind.FUNCTION_DECL,
		CursorKind.CXX_METHOD,
		CursorKind.DESTRUCTOR,
		CursorKind.CONVERSION_FUNCTION,
		CursorKind.FUNCTION_TEMPLATE,
	}
)


def resolve_callee(call: Cursor) -> Optional[str]:
	"""Name of the function a call expression invokes, or None if indirect."""
	callee = call.referenced
	if callee is None or callee.kind not in CALLABLE_KINDS:
		return None
	return callee.spelling or None


class CallReferenceCollector:
	"""Appends callee names to the record of the enclosing function."""

	def __init__(self, table: SymbolTable, enabled: bool = False):
		self.table = table
		self.enabled = enabled

	def record(self, call: Cursor, enclosing: Optional[str]) -> Optional[str]:
		if not self.enabled or not enclosing:
			return None
		callee = resolve_callee(call)
		if callee is None:
			return None
		if not self.table.add_call(enclosing, callee):
			log.debug("No function record for %s, dropping call to %s", enclosing, callee)
			return None
		return callee
