"""
Renderer-independent loaders. None of these are registered anywhere by
default, a game would usually make them common loaders::

	register_common_loader(TextLoader)
	register_common_loader(JSONLoader)
"""

import json
from pathlib import Path
import typing as t

from asset_queue.core.resolver import is_data_uri
from asset_queue.loaders.data_uri import get_parameter, split_data_uri
from asset_queue.loaders.threaded import ThreadedLoader

if t.TYPE_CHECKING:
	from pyglet.clock import Clock


class BytesLoader(ThreadedLoader[bytes]):
	extensions = ("bin",)
	media_type = "application"

	def decode(self, file: t.BinaryIO, filename: str) -> bytes:
		return file.read()


class TextLoader(ThreadedLoader[str]):
	"""
	Loads text files and ``text/plain`` data URIs. A data URI's
	``charset`` parameter takes precedence over ``encoding``.
	"""

	extensions = ("txt",)
	media_type = "text"

	def __init__(
		self,
		name: str,
		path: t.Optional[t.Union[str, Path]] = None,
		encoding: str = "utf-8",
		*,
		clock: t.Optional["Clock"] = None,
	) -> None:
		super().__init__(name, path, clock=clock)
		self.encoding = encoding
		if is_data_uri(self.source):
			_, params, _ = split_data_uri(self.source)
			self.encoding = get_parameter(params, "charset") or encoding

	def decode(self, file: t.BinaryIO, filename: str) -> str:
		return file.read().decode(self.encoding)


class JSONLoader(ThreadedLoader[t.Any]):
	extensions = ("json",)
	media_type = "application"

	def decode(self, file: t.BinaryIO, filename: str) -> t.Any:
		return json.load(file)
