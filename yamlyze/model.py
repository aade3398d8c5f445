from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


FunctionClass = Literal["normal", "static", "extern"]
VariableClass = Literal["global", "static", "extern"]
TypeKind = Literal["alias", "struct", "enum"]

# Sentinel size for incomplete or dependent types.
UNKNOWN_SIZE = -1


class Record(BaseModel):
	model_config = ConfigDict(populate_by_name=True)


class ArgRecord(Record):
	name: str
	type: str
	size: int = UNKNOWN_SIZE


class FieldRecord(Record):
	name: str
	type: str


class FunctionRecord(Record):
	name: str = Field(exclude=True)
	storage_class: FunctionClass = Field(default="normal", alias="class")
	returns: str
	args: List[ArgRecord] = []
	calls: List[str] = []
	docs: Dict[str, str] = {}


class VariableRecord(Record):
	name: str = Field(exclude=True)
	storage_class: Optional[VariableClass] = Field(default=None, alias="class")
	type: str


class TypeRecord(Record):
	name: str = Field(exclude=True)
	kind: TypeKind = Field(default="alias", exclude=True)
	underlying: str
	members: Optional[List[FieldRecord]] = None
	values: Optional[Dict[str, int]] = None
	docs: Optional[Dict[str, str]] = None

	@property
	def type(self) -> str:
		if self.kind == "alias":
			return self.underlying
		return self.kind

	def to_document(self) -> dict:
		data = {"type": self.type}
		data.update(self.model_dump(by_alias=True, exclude_none=True))
		return data


class SymbolDocument(Record):
	name: str
	functions: Dict[str, FunctionRecord] = {}
	variables: Dict[str, VariableRecord] = {}
	types: Dict[str, TypeRecord] = {}
	headers: List[str] = []

	def to_document(self) -> dict:
		return {
			"name": self.name,
			"functions": {k: v.model_dump(by_alias=True) for k, v in self.functions.items()},
			"variables": {
				k: v.model_dump(by_alias=True, exclude_none=True) for k, v in self.variables.items()
			},
			"types": {k: v.to_document() for k, v in self.types.items()},
			"headers": list(self.headers),
		}
