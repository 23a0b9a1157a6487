
from collections import deque
import typing as t

from loguru import logger

from asset_queue.enums import AssetStatus

if t.TYPE_CHECKING:
	from asset_queue.core.descriptor import AssetDescriptor
	from asset_queue.core.loader import CompletionCallback


CallbackFactory = t.Callable[["AssetDescriptor", int, bool], "CompletionCallback"]


class TaskQueue:
	"""
	The descriptors that have not been started yet, in the order they
	will be, along with the counters progress is reported by.
	"""

	def __init__(self) -> None:
		self._pending: t.Deque["AssetDescriptor"] = deque()

		self.remaining = 0
		"""
		Amount of assets that have not yet either loaded or failed.
		"""

		self.total = 0
		"""
		Amount of assets added since the last full reset and not
		removed since.
		"""

	@property
	def current(self) -> int:
		return self.total - self.remaining

	def push(self, descriptor: "AssetDescriptor") -> None:
		self._pending.append(descriptor)
		self.remaining += 1
		self.total += 1

	def start_next(self, make_callback: CallbackFactory) -> "AssetDescriptor":
		"""
		Pops the next descriptor, marks it as loading and calls its
		start function with a success and a failure callback made by
		``make_callback(descriptor, generation, success)``.
		Does not wait for anything, the descriptor is returned as soon
		as its start function returns.
		"""
		descriptor = self._pending.popleft()
		descriptor.status = AssetStatus.LOADING
		descriptor.generation += 1
		generation = descriptor.generation

		logger.trace(f"Starting {descriptor.name!r}")
		descriptor.start(
			make_callback(descriptor, generation, True),
			make_callback(descriptor, generation, False),
		)
		return descriptor

	def settle(self) -> None:
		"""
		An asset finished loading, successfully or not.
		"""
		self.remaining = max(0, self.remaining - 1)

	def discard(self, descriptor: "AssetDescriptor") -> None:
		"""
		Forgets about a removed asset.
		If it was still waiting to be started it is taken off the
		pending list. ``remaining`` only drops for assets that weren't
		settled yet.
		"""
		if descriptor in self._pending:
			self._pending.remove(descriptor)

		self.total = max(0, self.total - 1)
		if not descriptor.is_settled():
			self.remaining = max(0, self.remaining - 1)

	def reset(self, descriptors: t.Iterable["AssetDescriptor"]) -> None:
		"""
		Replaces the pending list with ``descriptors``, which are all
		considered unloaded.
		"""
		self._pending = deque(descriptors)
		self.remaining = self.total = len(self._pending)

	def clear(self) -> None:
		self._pending.clear()
		self.remaining = self.total = 0

	def __contains__(self, descriptor: object) -> bool:
		return descriptor in self._pending

	def __iter__(self) -> t.Iterator["AssetDescriptor"]:
		return iter(self._pending)

	def __len__(self) -> int:
		return len(self._pending)
