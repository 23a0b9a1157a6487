
import typing as t


class AssetQueueError(Exception):
	"""
	Base class of everything the asset queue raises on misuse.
	Failing to actually load an asset is not one of those, that is
	reported through the queue's events.
	"""
	pass


class MissingAssetNameError(AssetQueueError, ValueError):
	def __init__(self, operation: str) -> None:
		super().__init__(f"No asset name specified for {operation}()")


class NoExtensionError(AssetQueueError, ValueError):
	def __init__(self, name: str) -> None:
		super().__init__(f"Asset name does not have a file extension: {name!r}")
		self.name = name


class NoLoaderFoundError(AssetQueueError, LookupError):
	def __init__(self, name: str, key: t.Optional[str] = None) -> None:
		if key is None:
			msg = f"No loader specified for asset {name!r}"
		else:
			msg = f"No known loader for extension {key!r} in asset {name!r}"
		super().__init__(msg)
		self.name = name
		self.key = key


class DuplicateAssetError(AssetQueueError, ValueError):
	def __init__(self, name: str) -> None:
		super().__init__(f"Asset {name!r} already defined in asset queue")
		self.name = name


class MalformedLoaderError(AssetQueueError, TypeError):
	def __init__(self, name: str, loader: t.Any) -> None:
		super().__init__(
			f"Loader {loader!r} not implemented correctly for asset {name!r}; "
			f"it must return an object with a callable 'start'"
		)
		self.name = name
		self.loader = loader


class InvalidRegistrationError(AssetQueueError, ValueError):
	pass
