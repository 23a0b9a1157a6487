"""
Pulls the payload out of ``data:<mime>[;param...][;base64],<data>``
URIs. Which loader handles one is decided in
``asset_queue.core.resolver``, this is only concerned with the bytes.
"""

import base64
import typing as t
from urllib.parse import unquote_to_bytes

from asset_queue.core.resolver import DATA_URI_PREFIX, is_data_uri


def split_data_uri(uri: str) -> t.Tuple[str, t.Tuple[str, ...], str]:
	"""
	Splits a data URI into its mime type, its parameters and the still
	encoded payload. A missing mime type is reported as
	``"text/plain"``.

	:raises ValueError: If ``uri`` is no data URI or has no comma.
	"""
	if not is_data_uri(uri):
		raise ValueError(f"Not a data URI: {uri[:32]!r}")

	header, sep, payload = uri[len(DATA_URI_PREFIX):].partition(",")
	if not sep:
		raise ValueError(f"Malformed data URI, missing ',': {uri[:32]!r}")

	mime, *params = header.split(";")
	return (mime.strip() or "text/plain", tuple(p.strip() for p in params), payload)


def get_parameter(params: t.Sequence[str], key: str) -> t.Optional[str]:
	"""
	Returns the value of a ``key=value`` parameter, such as a data
	URI's ``charset``, or ``None``.
	"""
	for param in params:
		k, sep, v = param.partition("=")
		if sep and k.strip().lower() == key:
			return v.strip()
	return None


def decode_data_uri(uri: str) -> bytes:
	"""
	Returns the decoded payload of a data URI.

	:raises ValueError: If the URI is malformed or its base64 payload
		is broken.
	"""
	_, params, payload = split_data_uri(uri)
	raw = unquote_to_bytes(payload)
	if any(p.lower() == "base64" for p in params):
		return base64.b64decode(raw, validate=True)
	return raw
