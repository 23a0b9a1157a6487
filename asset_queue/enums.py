"""
Enums that aren't really too coupled to anything else.
"""

from enum import IntEnum


class AssetStatus(IntEnum):
	"""
	Where an asset is in its life inside an ``AssetQueue``.
	Moves strictly forward: ``QUEUED`` -> ``LOADING`` -> one of
	``SUCCEEDED`` or ``FAILED``, and only ever goes back to
	``QUEUED`` through ``AssetQueue.invalidate``.
	"""
	QUEUED = 0
	LOADING = 1
	SUCCEEDED = 2
	FAILED = 3

	def is_settled(self) -> bool:
		return self is AssetStatus.SUCCEEDED or self is AssetStatus.FAILED
