"""
Error types raised by the imposition stages.
"""


class ImpositionError(Exception):
	"""
	Base class for every failure surfaced by the merge, reorder and tile stages.
	"""

	stage = "imposition"

	def __init__(self, message: str) -> None:
		super().__init__(f"[{self.stage}] {message}")


class EngineClosedError(ImpositionError):
	stage = "engine"


class DeserializationError(ImpositionError):
	"""
	An input buffer is not a valid PDF document.
	"""

	stage = "merge"

	def __init__(self, message: str, position: int) -> None:
		self.position = position
		super().__init__(f"input {position}: {message}")


class AppendError(ImpositionError):
	stage = "merge"

	def __init__(self, message: str, source_index: int, target_index: int) -> None:
		self.source_index = source_index
		self.target_index = target_index
		super().__init__(f"appending input {source_index} at page {target_index}: {message}")


class CopyError(ImpositionError):
	stage = "reorder"

	def __init__(self, message: str, source_index: int, target_index: int) -> None:
		self.source_index = source_index
		self.target_index = target_index
		super().__init__(f"copying page {source_index} to page {target_index}: {message}")


class GeometryError(ImpositionError):
	"""
	Invalid page geometry, or a page transform that could not be applied.
	"""

	stage = "tile"

	def __init__(self, message: str, page_index: int | None = None, operation: str | None = None) -> None:
		self.detail = message
		self.page_index = page_index
		self.operation = operation
		prefix = ""
		if page_index is not None:
			prefix += f"page {page_index}: "
		if operation is not None:
			prefix += f"{operation}: "
		super().__init__(prefix + message)


class PreconditionViolation(ImpositionError, AssertionError):
	stage = "reorder"
