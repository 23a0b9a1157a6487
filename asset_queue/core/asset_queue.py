"""
The asset queue, tying registry, descriptors, task list and events
together.

Typical use from a pyglet game::

	assets = AssetQueue()
	assets.push_handlers(on_load_finished=lambda ev: show_menu())
	tex = assets.add("img/scene.png")

	def update(dt):
		if assets.update():
			...  # draw the game
		else:
			...  # draw a loading bar from assets.current / assets.total
"""

import typing as t

from loguru import logger

from asset_queue.core.descriptor import AssetDescriptor
from asset_queue.core.errors import (
	DuplicateAssetError, MalformedLoaderError, MissingAssetNameError, NoLoaderFoundError
)
from asset_queue.core.events import ProgressNotifier
from asset_queue.core.registry import COMMON_LOADERS, LoaderFactory, LoaderRegistry
from asset_queue.core.registry import register_common_loader as _register_common_loader
from asset_queue.core.task_queue import TaskQueue
from asset_queue.enums import AssetStatus

if t.TYPE_CHECKING:
	from asset_queue.core.loader import CompletionCallback


def _default_loaders() -> t.Tuple[LoaderFactory, ...]:
	from asset_queue.loaders.image import ImageLoader
	return (ImageLoader,)


class AssetQueue(ProgressNotifier):
	"""
	Preloads a bunch of named assets, starting one each time
	``update`` is called and reporting progress through the events of
	``ProgressNotifier``.

	Starting a load never waits for it to finish, so the queue puts no
	limit on how many loads are in flight at once. Loaders complete in
	whatever order they like.
	"""

	def __init__(self, register_defaults: bool = True) -> None:
		"""
		:param register_defaults: Whether to register the default
			image loader on top of the common loaders.
		"""
		self._assets: t.Dict[str, AssetDescriptor] = {}
		self._tasks = TaskQueue()
		self._loading = False

		self._loaders = COMMON_LOADERS.copy()
		if register_defaults:
			for loader in _default_loaders():
				self._loaders.register(loader)

	@property
	def remaining(self) -> int:
		"""
		Number of assets remaining to be loaded.
		"""
		return self._tasks.remaining

	@property
	def total(self) -> int:
		"""
		Total number of assets in this queue.
		"""
		return self._tasks.total

	@property
	def current(self) -> int:
		"""
		Same as ``total - remaining``.
		"""
		return self._tasks.current

	@property
	def loading(self) -> bool:
		"""
		Whether a loading round has been started and not yet finished.
		"""
		return self._loading

	@property
	def assets(self) -> t.Tuple[AssetDescriptor, ...]:
		return tuple(self._assets.values())

	@property
	def loaders(self) -> LoaderRegistry:
		"""
		This queue's own loaders. Registering on it does not affect
		other queues.
		"""
		return self._loaders

	def register_loader(self, loader: LoaderFactory) -> None:
		"""
		Registers a loader for this queue only, overriding any loaders
		already registered for its extensions or mime-types.
		"""
		self._loaders.register(loader)

	register_common_loader = staticmethod(_register_common_loader)

	def add(self, name: str, *args: t.Any, **kwargs: t.Any) -> t.Any:
		"""
		Adds an asset, picking its loader by the name's file extension
		or data URI mime type. Additional arguments are passed through
		to the loader.

		Returns the loader's value for the asset; this is only filled
		in fully once the asset has loaded.

		:raises MissingAssetNameError: If ``name`` is empty.
		:raises NoExtensionError: If no extension could be determined.
		:raises NoLoaderFoundError: If no loader is registered for it.
		"""
		if not name:
			raise MissingAssetNameError("add")

		loader = self._loaders.resolve(name)
		return self.add_as(loader, name, *args, **kwargs)

	def add_as(self, loader: LoaderFactory, name: str, *args: t.Any, **kwargs: t.Any) -> t.Any:
		"""
		Adds an asset to be loaded by a specific loader, useful for
		asset names that are generic keys and not file names.
		Additional arguments are passed through to the loader.

		:raises MissingAssetNameError: If ``name`` is empty.
		:raises NoLoaderFoundError: If ``loader`` is ``None``.
		:raises DuplicateAssetError: If an asset of that name exists.
		:raises MalformedLoaderError: If the loader's return value has
			no callable ``start``.
		"""
		if not name:
			raise MissingAssetNameError("add_as")
		if loader is None:
			raise NoLoaderFoundError(name)
		# TODO: eventually support dependencies and shared assets
		if name in self._assets:
			raise DuplicateAssetError(name)

		task = loader(name, *args, **kwargs)
		start = getattr(task, "start", None)
		if not callable(start):
			raise MalformedLoaderError(name, loader)

		descriptor = AssetDescriptor(name, start, getattr(task, "value", None))
		self._assets[name] = descriptor
		self._tasks.push(descriptor)

		logger.trace(f"Queued {name!r} ({self.total} total)")
		return descriptor.value

	def add_all(self, names: t.Iterable[str]) -> t.List[t.Any]:
		"""
		Calls ``add`` for each name, returning their values.
		"""
		return [self.add(name) for name in names]

	def get_descriptor(self, name: str) -> t.Optional[AssetDescriptor]:
		return self._assets.get(name)

	def get_status(self, name: str) -> t.Optional[AssetStatus]:
		d = self._assets.get(name)
		return None if d is None else d.status

	def is_loaded(self, name: str) -> bool:
		return self.get_status(name) is AssetStatus.SUCCEEDED

	def get(self, name: str) -> t.Any:
		"""
		Returns the value stored for an asset, such as an image, or
		``None`` if it does not exist.
		"""
		d = self._assets.get(name)
		return None if d is None else d.value

	def remove(self, name: str) -> t.Any:
		"""
		Removes an asset, returning its value or ``None`` if no asset
		of that name exists.

		This will not stop the asset from loading if it already started
		and it will not free anything its value holds; that's up to the
		caller. If the asset completes later on, that is ignored.
		"""
		descriptor = self._assets.pop(name, None)
		if descriptor is None:
			return None

		self._tasks.discard(descriptor)
		logger.trace(f"Removed {name!r}")

		if self._tasks.remaining == 0:
			self._end_loading()

		return descriptor.value

	def remove_all(self) -> None:
		self._assets.clear()
		self._tasks.clear()
		logger.trace("Removed all assets")
		self._end_loading()

	def destroy(self) -> None:
		"""
		Drops all assets. Same as ``remove_all``.
		"""
		self.remove_all()

	def invalidate(self) -> None:
		"""
		Marks every asset as not loaded and queues all of them up again,
		for when whatever they were loaded into is gone, such as on
		OpenGL context loss.
		Completions of loads started before this are ignored.
		"""
		for descriptor in self._assets.values():
			descriptor.status = AssetStatus.QUEUED
			descriptor.generation += 1
		self._tasks.reset(self._assets.values())
		self._loading = False
		logger.trace(f"Invalidated {self.total} assets")

	def update(self) -> bool:
		"""
		Starts loading the next asset, if there is one.
		Returns whether all assets are done loading, which does not
		include the one that may have just been started.
		"""
		if not self._tasks:
			return self._tasks.remaining == 0

		if len(self._tasks) == len(self._assets) and not self._loading:
			self._loading = True
			self._notify_started(self._tasks.total)

		self._tasks.start_next(self._make_callback)
		return self._tasks.remaining == 0

	def load(self) -> None:
		"""
		Starts all remaining assets at once, so ``update`` doesn't have
		to be polled. Events still only fire as loaders complete.
		"""
		while self._tasks:
			self.update()

	def _make_callback(
		self, descriptor: AssetDescriptor, generation: int, success: bool
	) -> "CompletionCallback":
		def callback() -> None:
			self._on_load_complete(descriptor, generation, success)
		return callback

	def _on_load_complete(
		self, descriptor: AssetDescriptor, generation: int, success: bool
	) -> None:
		# Removed while in flight, or started again since; the events for
		# it have been taken care of already.
		if self._assets.get(descriptor.name) is not descriptor:
			return
		if descriptor.generation != generation:
			return
		if descriptor.status is not AssetStatus.LOADING:
			logger.warning(f"Loader of {descriptor.name!r} completed more than once, ignoring.")
			return

		descriptor.status = AssetStatus.SUCCEEDED if success else AssetStatus.FAILED
		self._tasks.settle()

		current = self._tasks.current
		total = self._tasks.total
		self._notify_settled(descriptor.name, success, current, total)

		if self._tasks.remaining == 0:
			self._loading = False
			self._notify_finished(current, total)

	def _end_loading(self) -> None:
		if self._loading:
			self._loading = False
			self._notify_finished(0, 0)

	def __contains__(self, name: object) -> bool:
		return name in self._assets

	def __len__(self) -> int:
		return len(self._assets)
