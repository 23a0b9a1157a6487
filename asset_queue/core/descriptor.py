
import typing as t

from asset_queue.enums import AssetStatus

if t.TYPE_CHECKING:
	from asset_queue.core.loader import CompletionCallback


StartFunction = t.Callable[["CompletionCallback", "CompletionCallback"], None]


class AssetDescriptor:
	"""
	Bookkeeping record for a single asset of an ``AssetQueue``.
	Not meant to be modified by user code.
	"""

	__slots__ = ("name", "start", "value", "status", "generation")

	def __init__(self, name: str, start: StartFunction, value: t.Any) -> None:
		self.name = name
		self.start = start
		self.value = value
		self.status = AssetStatus.QUEUED

		self.generation = 0
		"""
		Bumped each time the asset is started or invalidated. Completion callbacks
		remember the generation they were handed out for, anything that
		doesn't match belongs to a start that has since been
		invalidated.
		"""

	def is_settled(self) -> bool:
		return self.status.is_settled()

	def __repr__(self) -> str:
		return f"<{self.__class__.__name__} {self.name!r} {self.status.name}>"
