from __future__ import annotations

from typing import Dict, Optional

from clang.cindex import Cursor


def raw_doc(cursor: Cursor, enabled: bool = True) -> Optional[str]:
	if not enabled:
		return None
	return cursor.raw_comment or None


def doc_entry(cursor: Cursor, enabled: bool) -> Dict[str, str]:
	text = raw_doc(cursor, enabled)
	return {"raw": text} if text else {}
