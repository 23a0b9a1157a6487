"""
Figures out which registry key an asset name should be loaded by.
"""

import typing as t

from asset_queue.core.errors import NoExtensionError


DATA_URI_PREFIX = "data:"


def get_data_type(name: str) -> t.Optional[str]:
	"""
	Attempts to extract a loader key from the mime type of a data URI.
	Data URIs without a mime type or of type ``text/plain`` map to
	``"txt"``, everything else to the lowercased subtype, so
	``data:image/gif;base64,...`` turns into ``"gif"``.

	Returns ``None`` if ``name`` is not a data URI or a malformed one
	(no comma separating the header from the payload).
	"""
	if name[:len(DATA_URI_PREFIX)].lower() != DATA_URI_PREFIX:
		return None

	data = name[len(DATA_URI_PREFIX):]
	sep_idx = data.find(",")
	if sep_idx == -1:
		return None

	# "image/gif;base64" => "image/gif"
	info = data[:sep_idx].split(";")[0].strip()
	if not info or info.lower() == "text/plain":
		return "txt"

	return info.split("/")[-1].lower()


def get_extension(name: str) -> str:
	"""
	Returns the lowercased file extension of ``name``, or an empty
	string if it does not have a clear one.
	"""
	idx = name.rfind(".")
	if idx <= 0 or idx == len(name) - 1:
		return ""
	return name[idx + 1:].lower()


def is_data_uri(name: str) -> bool:
	return name[:len(DATA_URI_PREFIX)].lower() == DATA_URI_PREFIX


def resolve_key(name: str) -> str:
	"""
	Returns the loader key for the asset ``name``.

	:raises NoExtensionError: If no key can be derived from the name,
		which includes malformed data URIs.
	"""
	if is_data_uri(name):
		key = get_data_type(name)
	else:
		key = get_extension(name)

	if not key:
		raise NoExtensionError(name)

	return key
