"""
The contract between the asset queue and the things that actually
load stuff.

A loader is a factory: called with ``(name, *args, **kwargs)`` it
returns an object with a ``value`` and a ``start(on_complete,
on_error)`` method. The factory itself carries ``extensions`` and
optionally ``media_type``, which the ``LoaderRegistry`` keys it by.

Subclassing ``Loader`` is the comfortable way to write one since the
class is its own factory, but any callable that has the attributes
and returns a fitting object is accepted.
"""

import abc
import typing as t


T = t.TypeVar("T")

CompletionCallback = t.Callable[[], None]


class Loader(abc.ABC, t.Generic[T]):
	extensions: t.ClassVar[t.Sequence[str]] = ()
	"""
	Lowercase file extensions this loader handles, e.g.
	``("png", "jpg")``. Must not be empty for the loader to be
	registered.
	"""

	media_type: t.ClassVar[t.Optional[str]] = None
	"""
	The top-level MIME type (``"image"``, ``"text"``...) of data URIs
	this loader handles. Each extension is additionally registered
	as ``media_type/extension`` if this is given.
	"""

	def __init__(self, name: str) -> None:
		self.name = name
		self.value: T

	@abc.abstractmethod
	def start(self, on_complete: CompletionCallback, on_error: CompletionCallback) -> None:
		"""
		Begin loading. Must return quickly and call exactly one of
		``on_complete`` or ``on_error`` exactly once, possibly right
		away, possibly much later from the main thread.
		Must not raise.
		"""
		raise NotImplementedError()
