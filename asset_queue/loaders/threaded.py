"""
Plumbing for loaders that read and decode on worker threads.

The queue itself is not thread-safe and expects loaders to complete on
the main thread, so the workers never call back directly. Finished
futures are relayed through a pyglet clock with ``schedule_once``,
which runs them the next time the game ticks that clock.
"""

import abc
from concurrent.futures import Future, ThreadPoolExecutor
import io
from pathlib import Path
import typing as t

from loguru import logger
from pyglet import clock

from asset_queue.config import LoaderConfig
from asset_queue.core.loader import Loader
from asset_queue.core.resolver import get_data_type, is_data_uri
from asset_queue.loaders.data_uri import decode_data_uri

if t.TYPE_CHECKING:
	from asset_queue.core.loader import CompletionCallback


T = t.TypeVar("T")


_config = LoaderConfig.get_default()
_executor: t.Optional[ThreadPoolExecutor] = None


def configure(config: LoaderConfig) -> None:
	"""
	Applies new loader settings. The running executor, if any, is shut
	down without waiting; loads already submitted to it still finish.
	"""
	global _config

	_config = config
	shutdown(wait=False)


def get_executor() -> ThreadPoolExecutor:
	"""
	Returns the executor all threaded loaders share, creating it if
	it does not exist.
	"""
	global _executor

	if _executor is None:
		_executor = ThreadPoolExecutor(_config.loader_thread_count, "AssetLoader")
	return _executor


def shutdown(wait: bool = True) -> None:
	"""
	Shuts the shared executor down. A new one is created on the next
	load. Note that completions are still relayed through the clock, so
	they will only arrive once it ticks.
	"""
	global _executor

	if _executor is not None:
		_executor.shutdown(wait=wait)
		_executor = None


def resolve_path(path: t.Union[str, Path]) -> Path:
	"""
	Resolves ``path`` against the configured asset root, unless it is
	absolute.
	"""
	path = Path(path)
	if _config.asset_root and not path.is_absolute():
		return Path(_config.asset_root) / path
	return path


class LoadResult(t.Generic[T]):
	"""
	Placeholder handed out by threaded loaders as soon as an asset is
	added. ``item`` is filled in right before the queue is told the
	asset has loaded.
	"""

	__slots__ = ("item", "error", "done")

	def __init__(self) -> None:
		self.item: t.Optional[T] = None
		self.error: t.Optional[BaseException] = None
		self.done = False

	def __repr__(self) -> str:
		state = "failed" if self.error is not None else ("done" if self.done else "pending")
		return f"<{self.__class__.__name__} {state} {self.item!r}>"


class ThreadedLoader(Loader[LoadResult[T]]):
	"""
	Base class for loaders that decode a file or data URI on the shared
	executor.

	The asset name is the source unless ``path`` is given, in which
	case the asset is still known under its name to the queue.
	"""

	def __init__(
		self,
		name: str,
		path: t.Optional[t.Union[str, Path]] = None,
		*,
		clock: t.Optional[clock.Clock] = None,
	) -> None:
		super().__init__(name)
		self.source = name if path is None else str(path)
		self.value = LoadResult()
		self._clock = _default_clock() if clock is None else clock

	@abc.abstractmethod
	def decode(self, file: t.BinaryIO, filename: str) -> T:
		"""
		Turns the opened source into the asset. Runs on a worker thread.
		``filename`` is the path of the source, or a made-up name
		carrying the extension for data URIs.
		"""
		raise NotImplementedError()

	def load_source(self) -> T:
		if is_data_uri(self.source):
			with io.BytesIO(decode_data_uri(self.source)) as f:
				return self.decode(f, f"data.{get_data_type(self.source)}")

		path = resolve_path(self.source)
		with path.open("rb") as f:
			return self.decode(f, str(path))

	def start(self, on_complete: "CompletionCallback", on_error: "CompletionCallback") -> None:
		future = get_executor().submit(self.load_source)
		future.add_done_callback(
			lambda future: self._clock.schedule_once(
				self._finish, 0.0, future, on_complete, on_error
			)
		)

	def _finish(
		self,
		_dt: float,
		future: Future,
		on_complete: "CompletionCallback",
		on_error: "CompletionCallback",
	) -> None:
		self.value.done = True

		if future.cancelled():
			logger.warning(f"Load of {self.name!r} was cancelled")
			on_error()
			return

		if (exc := future.exception()) is not None:
			self.value.error = exc
			logger.warning(f"Error loading {self.name!r}: {exc}")
			on_error()
			return

		self.value.item = future.result()
		on_complete()


def _default_clock() -> clock.Clock:
	return clock.get_default()
