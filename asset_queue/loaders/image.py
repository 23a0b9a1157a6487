
import typing as t

from asset_queue.loaders.threaded import ThreadedLoader

if t.TYPE_CHECKING:
	from pyglet.image import AbstractImage


class ImageLoader(ThreadedLoader["AbstractImage"]):
	"""
	The default image loader, decoding through pyglet's image codecs.
	The result is CPU-side image data; turning it into a texture needs
	a GL context and is left to whoever picks the asset up.

	Accepts an optional path override, so
	``assets.add("frame0.png", "path/to/frame1.png")`` loads the
	latter but is known to the queue as ``"frame0.png"``.
	"""

	extensions = ("png", "gif", "jpg", "jpeg")
	media_type = "image"

	def decode(self, file: t.BinaryIO, filename: str) -> "AbstractImage":
		# pyglet.image pulls in the GL bindings, don't drag them into
		# processes that never load an image.
		from pyglet import image

		return image.load(filename, file=file)
