from __future__ import annotations


class ScanError(Exception):
	def __init__(self, message: str, code: str) -> None:
		super().__init__(message)
		self.code = code


class InvalidRootError(ScanError):
	def __init__(self, root: str) -> None:
		super().__init__(f"Directory not found: {root}", "invalid_root")
		self.root = root
