
import typing as t

from loguru import logger

from asset_queue.core.errors import InvalidRegistrationError, NoLoaderFoundError
from asset_queue.core.resolver import resolve_key

if t.TYPE_CHECKING:
	from asset_queue.core.loader import Loader


LoaderFactory = t.Union[t.Type["Loader"], t.Callable[..., t.Any]]


class LoaderRegistry:
	"""
	Simple mapping of lowercase extensions (``"png"``) and mime-style
	keys (``"image/png"``) to loader factories.
	Registering overwrites whatever was there before, no questions
	asked.
	"""

	def __init__(self, loaders: t.Optional[t.Dict[str, LoaderFactory]] = None) -> None:
		self._loaders: t.Dict[str, LoaderFactory] = {} if loaders is None else dict(loaders)

	def register(self, loader: LoaderFactory) -> None:
		"""
		Registers ``loader`` under each of its ``extensions`` and, if it
		has a ``media_type``, under ``media_type/extension`` as well.

		:raises InvalidRegistrationError: If the loader is missing or
			does not specify at least one lowercase extension.
		"""
		if loader is None:
			raise InvalidRegistrationError("No loader given to register")

		extensions = getattr(loader, "extensions", None)
		if (
			extensions is None or
			isinstance(extensions, str) or
			len(extensions) == 0
		):
			raise InvalidRegistrationError(
				f"Must specify at least one extension for the loader {loader!r}"
			)

		for ext in extensions:
			if not isinstance(ext, str) or not ext or ext != ext.lower():
				raise InvalidRegistrationError(
					f"Loader {loader!r} has an invalid extension {ext!r}, "
					f"extensions must be non-empty lowercase strings"
				)

		media_type = getattr(loader, "media_type", None)
		for ext in extensions:
			self._loaders[ext] = loader
			if media_type:
				self._loaders[f"{media_type}/{ext}"] = loader

		logger.trace(f"Registered loader {loader!r} for {tuple(extensions)}")

	def unregister(self, loader: LoaderFactory) -> None:
		"""
		Removes every key pointing at ``loader``.
		"""
		for key in [k for k, v in self._loaders.items() if v is loader]:
			del self._loaders[key]

	def get(self, key: str) -> t.Optional[LoaderFactory]:
		return self._loaders.get(key)

	def resolve(self, name: str) -> LoaderFactory:
		"""
		Finds the loader for an asset by its name.

		:raises NoExtensionError: If the name has no usable extension.
		:raises NoLoaderFoundError: If nothing is registered for it.
		"""
		key = resolve_key(name)
		if key not in self._loaders:
			raise NoLoaderFoundError(name, key)
		return self._loaders[key]

	def keys(self) -> t.KeysView[str]:
		return self._loaders.keys()

	def copy(self) -> "LoaderRegistry":
		return LoaderRegistry(self._loaders)

	def __contains__(self, key: object) -> bool:
		return key in self._loaders

	def __len__(self) -> int:
		return len(self._loaders)


COMMON_LOADERS = LoaderRegistry()
"""
Loaders shared by every ``AssetQueue`` created from now on.
Something like an image loader is tied to one rendering setup, but a
JSON loader is renderer-independent and thus "common".
Each queue copies these when it's created; registering more later does
not affect queues that already exist.
"""


def register_common_loader(loader: LoaderFactory) -> None:
	"""
	Registers a loader with ``COMMON_LOADERS``.
	"""
	COMMON_LOADERS.register(loader)
