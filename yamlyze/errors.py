from __future__ import annotations


class YamlyzeError(Exception):
	"""Base class for failures that abort a run."""


class OptionsFileError(YamlyzeError):
	def __init__(self, path: str, reason: str = ""):
		self.path = path
		message = f"Couldn't open options file {path}"
		if reason:
			message += f": {reason}"
		super().__init__(message)


class ParseError(YamlyzeError):
	def __init__(self, path: str, reason: str):
		self.path = path
		super().__init__(f"{reason}: {path}")
