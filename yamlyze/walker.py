from __future__ import annotations

import enum
import logging
from typing import Dict, List, Optional, Tuple

from clang.cindex import Cursor, CursorKind, StorageClass, TranslationUnit, Type, TypeKind

from .builder import SymbolTable
from .calls import CallReferenceCollector
from .config import AnalysisOptions
from .docs import doc_entry
from .frontend import pointer_size
from .locality import LocalityFilter
from .model import (
	UNKNOWN_SIZE,
	ArgRecord,
	FieldRecord,
	FunctionRecord,
	TypeRecord,
	VariableRecord,
)

log = logging.getLogger(__name__)


class DeclKind(enum.Enum):
	FUNCTION = "function"
	VARIABLE = "variable"
	TYPE_ALIAS = "type_alias"
	CALL = "call"
	OTHER = "other"


FUNCTION_KINDS = frozenset(
	{
		CursorKind.FUNCTION_DECL,
		CursorKind.CXX_METHOD,
		CursorKind.CONSTRUCTOR,
		CursorKind.DESTRUCTOR,
		CursorKind.CONVERSION_FUNCTION,
		CursorKind.FUNCTION_TEMPLATE,
	}
)

TYPE_ALIAS_KINDS = frozenset({CursorKind.TYPEDEF_DECL, CursorKind.TYPE_ALIAS_DECL})

# Deleted and defaulted definitions have neither.
BODY_KINDS = frozenset({CursorKind.COMPOUND_STMT, CursorKind.CXX_TRY_STMT})

REFERENCE_KINDS = frozenset({TypeKind.LVALUEREFERENCE, TypeKind.RVALUEREFERENCE})

# CXTypeLayoutError_Dependent
LAYOUT_DEPENDENT = -3

UNSIGNED_KINDS = frozenset(
	{
		TypeKind.BOOL,
		TypeKind.CHAR_U,
		TypeKind.UCHAR,
		TypeKind.CHAR16,
		TypeKind.CHAR32,
		TypeKind.USHORT,
		TypeKind.UINT,
		TypeKind.ULONG,
		TypeKind.ULONGLONG,
		TypeKind.UINT128,
	}
)

FUNCTION_CLASSES: Dict[StorageClass, str] = {
	StorageClass.STATIC: "static",
	StorageClass.EXTERN: "extern",
}


def classify(cursor: Cursor) -> DeclKind:
	kind = cursor.kind
	if kind in FUNCTION_KINDS:
		return DeclKind.FUNCTION
	if kind == CursorKind.VAR_DECL:
		return DeclKind.VARIABLE
	if kind in TYPE_ALIAS_KINDS:
		return DeclKind.TYPE_ALIAS
	if kind == CursorKind.CALL_EXPR:
		return DeclKind.CALL
	return DeclKind.OTHER


def _storage_class(cursor: Cursor) -> Optional[StorageClass]:
	try:
		return cursor.storage_class
	except ValueError:
		# Storage classes newer than the bindings know about.
		return None


def function_class(cursor: Cursor) -> str:
	return FUNCTION_CLASSES.get(_storage_class(cursor), "normal")


def variable_class(cursor: Cursor) -> str:
	return FUNCTION_CLASSES.get(_storage_class(cursor), "global")


def has_global_storage(cursor: Cursor) -> bool:
	if _storage_class(cursor) in FUNCTION_CLASSES:
		return True
	parent = cursor.semantic_parent
	return parent is None or parent.kind not in FUNCTION_KINDS


def at_translation_unit(cursor: Cursor) -> bool:
	parent = cursor.semantic_parent
	return parent is not None and parent.kind == CursorKind.TRANSLATION_UNIT


def type_size(t: Type, pointer_size: int) -> int:
	# A reference is stored as a pointer and is complete even when the
	# referenced type is not; get_size() measures the referenced type.
	if t.kind in REFERENCE_KINDS:
		if t.get_pointee().get_size() == LAYOUT_DEPENDENT:
			return UNKNOWN_SIZE
		return pointer_size
	# Negative results are layout errors (incomplete, dependent, ...).
	size = t.get_size()
	return size if size >= 0 else UNKNOWN_SIZE


def has_body(cursor: Cursor) -> bool:
	"""True when some declaration of this function carries a body."""
	definition = cursor.get_definition()
	if definition is None:
		return False
	return any(child.kind in BODY_KINDS for child in definition.get_children())


def sign_extend(value: int, bits: int) -> int:
	if bits <= 0:
		return value
	if value >= 1 << (bits - 1):
		return value - (1 << bits)
	return value


def _definition(decl: Cursor) -> Cursor:
	return decl.get_definition() or decl


def struct_members(decl: Cursor) -> List[FieldRecord]:
	return [
		FieldRecord(name=field.spelling, type=field.type.spelling)
		for field in _definition(decl).get_children()
		if field.kind == CursorKind.FIELD_DECL
	]


def enum_values(decl: Cursor) -> Dict[str, int]:
	decl = _definition(decl)
	width = 0
	integer = decl.enum_type
	if integer.kind in UNSIGNED_KINDS:
		width = max(integer.get_size(), 0) * 8
	values: Dict[str, int] = {}
	for constant in decl.get_children():
		if constant.kind == CursorKind.ENUM_CONSTANT_DECL:
			values[constant.spelling] = sign_extend(constant.enum_value, width)
	return values


class DeclarationWalker:
	"""One pre-order pass over a translation unit, filling a SymbolTable."""

	def __init__(
		self,
		target_path: str,
		options: AnalysisOptions,
		pointer_size: int,
		table: Optional[SymbolTable] = None,
	):
		self.options = options
		self.pointer_size = pointer_size
		self.table = table if table is not None else SymbolTable()
		self.locality = LocalityFilter(target_path, all_files=options.all_files)
		self.collector = CallReferenceCollector(self.table, enabled=options.calls)

	def walk(self, root: Cursor) -> SymbolTable:
		# Each frame carries the name of the function whose body encloses it,
		# so leaving a function restores the outer context.
		stack: List[Tuple[Cursor, Optional[str]]] = [
			(child, None) for child in reversed(list(root.get_children()))
		]
		while stack:
			cursor, enclosing = stack.pop()
			if cursor.location.file is not None and cursor.location.is_in_system_header:
				continue
			inner = self.dispatch(cursor, enclosing)
			children = list(cursor.get_children())
			stack.extend((child, inner) for child in reversed(children))
		return self.table

	def dispatch(self, cursor: Cursor, enclosing: Optional[str]) -> Optional[str]:
		"""Handle one cursor and return the context for its children."""
		kind = classify(cursor)
		if kind is DeclKind.FUNCTION:
			return self.visit_function(cursor)
		if kind is DeclKind.VARIABLE:
			self.visit_variable(cursor)
		elif kind is DeclKind.TYPE_ALIAS:
			self.visit_type_alias(cursor)
		elif kind is DeclKind.CALL:
			self.collector.record(cursor, enclosing)
		return enclosing

	def visit_function(self, cursor: Cursor) -> Optional[str]:
		if not self.locality.accepts(cursor):
			return None
		if not self.options.header and not has_body(cursor):
			return None

		name = cursor.spelling
		args = [
			ArgRecord(
				name=param.spelling,
				type=param.type.spelling,
				size=type_size(param.type, self.pointer_size),
			)
			for param in cursor.get_children()
			if param.kind == CursorKind.PARM_DECL
		]
		record = FunctionRecord(
			name=name,
			storage_class=function_class(cursor),
			returns=cursor.result_type.spelling,
			args=args,
			docs=doc_entry(cursor, self.options.docs),
		)
		self.table.upsert_function(record)
		log.debug("function %s (%d args)", name, len(args))
		return name

	def visit_variable(self, cursor: Cursor) -> None:
		if not has_global_storage(cursor):
			return
		if not self.locality.accepts(cursor):
			return
		storage = variable_class(cursor) if at_translation_unit(cursor) else None
		self.table.upsert_variable(
			VariableRecord(name=cursor.spelling, storage_class=storage, type=cursor.type.spelling)
		)
		log.debug("variable %s", cursor.spelling)

	def visit_type_alias(self, cursor: Cursor) -> None:
		if not self.locality.accepts(cursor):
			return
		name = cursor.spelling
		underlying = cursor.underlying_typedef_type
		record = TypeRecord(
			name=name,
			underlying=underlying.spelling,
			docs=doc_entry(cursor, self.options.docs) or None,
		)
		canonical = underlying.get_canonical()
		if canonical.kind == TypeKind.RECORD:
			decl = canonical.get_declaration()
			if decl.kind == CursorKind.STRUCT_DECL:
				record.kind = "struct"
				record.members = struct_members(decl) or None
		elif canonical.kind == TypeKind.ENUM:
			record.kind = "enum"
			record.values = enum_values(canonical.get_declaration()) or None
		self.table.upsert_type(record)
		log.debug("type %s (%s)", name, record.kind)


def walk_translation_unit(
	tu: TranslationUnit,
	target_path: str,
	options: Optional[AnalysisOptions] = None,
	table: Optional[SymbolTable] = None,
) -> SymbolTable:
	walker = DeclarationWalker(target_path, options or AnalysisOptions(), pointer_size(tu), table)
	walker.walk(tu.cursor)
	log.info("Collected %s", walker.table.summary())
	return walker.table
