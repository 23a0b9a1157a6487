
import typing as t

from pyglet.event import EventDispatcher


class LoadEvent:
	"""
	Passed to every handler of a ``ProgressNotifier`` event.
	"""

	__slots__ = ("name", "current", "total")

	def __init__(self, current: int, total: int, name: t.Optional[str] = None) -> None:
		self.name = name
		"""
		Name of the asset the event is about. ``None`` for the
		``on_load_started`` and ``on_load_finished`` events.
		"""

		self.current = current
		"""
		The number of assets that have been loaded or have failed
		loading.
		"""

		self.total = total
		"""
		The number of assets in the queue.
		"""

	def __eq__(self, o: object) -> bool:
		if isinstance(o, LoadEvent):
			return o.name == self.name and o.current == self.current and o.total == self.total
		return NotImplemented

	def __repr__(self) -> str:
		return (
			f"<{self.__class__.__name__} name={self.name!r} "
			f"current={self.current} total={self.total}>"
		)


class ProgressNotifier(EventDispatcher):
	"""
	Broadcasts the four loading events. Attach any number of listeners
	with ``push_handlers``; handlers returning a truthy value stop the
	event from reaching the ones pushed before them, as usual for
	pyglet.

	- ``on_load_started(event)``: the first asset of a loading round
	  has just been started. ``event.current`` is always 0.
	- ``on_load_progress(event)``: an asset has been loaded, or failed
	  loading. ``event.name`` is its name.
	- ``on_load_error(event)``: an asset failed loading. Dispatched
	  right before the corresponding ``on_load_progress``.
	- ``on_load_finished(event)``: no assets remain to be loaded.
	"""

	def _notify_started(self, total: int) -> None:
		self.dispatch_event("on_load_started", LoadEvent(0, total))

	def _notify_settled(self, name: str, success: bool, current: int, total: int) -> None:
		if not success:
			self.dispatch_event("on_load_error", LoadEvent(current, total, name))
		self.dispatch_event("on_load_progress", LoadEvent(current, total, name))

	def _notify_finished(self, current: int, total: int) -> None:
		self.dispatch_event("on_load_finished", LoadEvent(current, total))


ProgressNotifier.register_event_type("on_load_started")
ProgressNotifier.register_event_type("on_load_progress")
ProgressNotifier.register_event_type("on_load_error")
ProgressNotifier.register_event_type("on_load_finished")
