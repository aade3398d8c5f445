from __future__ import annotations

from typing import Dict, Optional

from .model import FunctionRecord, TypeRecord, VariableRecord


class SymbolTable:
	"""The three keyed tables filled by one traversal."""

	def __init__(self):
		self.functions: Dict[str, FunctionRecord] = {}
		self.variables: Dict[str, VariableRecord] = {}
		self.types: Dict[str, TypeRecord] = {}

	def upsert_function(self, record: FunctionRecord) -> None:
		self.functions[record.name] = record

	def upsert_variable(self, record: VariableRecord) -> None:
		# Storage class is only known at translation-unit scope; keep the
		# previously recorded class when the new record carries none.
		previous = self.variables.get(record.name)
		if record.storage_class is None and previous is not None and previous.storage_class is not None:
			record = record.model_copy(update={"storage_class": previous.storage_class})
		self.variables[record.name] = record

	def upsert_type(self, record: TypeRecord) -> None:
		self.types[record.name] = record

	def add_call(self, function_name: str, callee: str) -> bool:
		record: Optional[FunctionRecord] = self.functions.get(function_name)
		if record is None:
			return False
		record.calls.append(callee)
		return True

	def summary(self) -> str:
		return (
			f"{len(self.functions)} functions, {len(self.variables)} variables, "
			f"{len(self.types)} types"
		)
