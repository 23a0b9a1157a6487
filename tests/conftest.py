import time
import typing as t

import pytest
from pyglet.clock import Clock

from asset_queue.config import LoaderConfig
from asset_queue.core.asset_queue import AssetQueue
from asset_queue.core.registry import COMMON_LOADERS
from asset_queue.loaders import threaded


class ManualTask:
	"""A started-or-not load that completes only when a test says so."""

	def __init__(self, name: str, *args: t.Any, **kwargs: t.Any) -> None:
		self.name = name
		self.args = args
		self.kwargs = kwargs
		self.value = {"name": name}
		self.on_complete: t.Optional[t.Callable[[], None]] = None
		self.on_error: t.Optional[t.Callable[[], None]] = None

	@property
	def started(self) -> bool:
		return self.on_complete is not None

	def start(self, on_complete, on_error) -> None:
		self.on_complete = on_complete
		self.on_error = on_error

	def complete(self) -> None:
		self.on_complete()

	def fail(self) -> None:
		self.on_error()


class ManualLoader:
	"""
	Loader factory standing in for the image loader. Keeps every task it
	created around by asset name.
	"""

	extensions = ("png", "gif", "jpg", "jpeg")
	media_type = "image"

	def __init__(self) -> None:
		self.tasks: t.Dict[str, ManualTask] = {}
		self.start_order: t.List[str] = []

	def __call__(self, name: str, *args: t.Any, **kwargs: t.Any) -> ManualTask:
		task = ManualTask(name, *args, **kwargs)
		original_start = task.start

		def start(on_complete, on_error) -> None:
			self.start_order.append(name)
			original_start(on_complete, on_error)

		task.start = start
		self.tasks[name] = task
		return task


class EventRecorder:
	def __init__(self) -> None:
		self.events: t.List[t.Tuple[str, t.Any]] = []

	def on_load_started(self, ev) -> None:
		self.events.append(("started", ev))

	def on_load_progress(self, ev) -> None:
		self.events.append(("progress", ev))

	def on_load_error(self, ev) -> None:
		self.events.append(("error", ev))

	def on_load_finished(self, ev) -> None:
		self.events.append(("finished", ev))

	def of(self, kind: str) -> t.List[t.Any]:
		return [ev for k, ev in self.events if k == kind]

	def kinds(self) -> t.List[str]:
		return [k for k, _ in self.events]


@pytest.fixture
def manual_loader() -> ManualLoader:
	return ManualLoader()


@pytest.fixture
def recorder() -> EventRecorder:
	return EventRecorder()


@pytest.fixture
def assets(manual_loader, recorder) -> AssetQueue:
	"""A queue whose image extensions are served by a ``ManualLoader``."""
	queue = AssetQueue()
	queue.register_loader(manual_loader)
	queue.push_handlers(recorder)
	return queue


@pytest.fixture
def common_loaders():
	"""Restores the common loaders after a test messed with them."""
	saved = COMMON_LOADERS.copy()
	yield COMMON_LOADERS
	COMMON_LOADERS._loaders = saved._loaders


@pytest.fixture
def clock() -> Clock:
	return Clock()


@pytest.fixture
def loader_config(tmp_path):
	"""Points the threaded loaders at ``tmp_path`` with a fresh executor."""
	config = LoaderConfig(2, str(tmp_path))
	threaded.configure(config)
	yield config
	threaded.shutdown(wait=True)
	threaded.configure(LoaderConfig.get_default())


def tick_until(clock: Clock, predicate: t.Callable[[], bool], timeout: float = 5.0) -> bool:
	"""
	Ticks ``clock`` until ``predicate`` holds, like a game loop would,
	giving up after ``timeout`` seconds.
	"""
	deadline = time.monotonic() + timeout
	while not predicate():
		if time.monotonic() > deadline:
			return False
		clock.tick()
		time.sleep(0.005)
	return True
