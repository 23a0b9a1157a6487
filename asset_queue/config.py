
import json
from pathlib import Path
import typing as t

from loguru import logger
from schema import And, Optional, Schema


class LoaderConfig:
	"""
	Stores settings for the threaded loaders.

	`loader_thread_count`: Amount of worker threads that files are
		read and decoded on.
	`asset_root`: Directory relative asset paths are resolved against.
		Empty to use the working directory.
	"""

	SCHEMA = Schema(
		{
			Optional("loader_thread_count", default=4): And(int, lambda n: n > 0),
			Optional("asset_root", default=""): str,
		},
		ignore_extra_keys = True,
	)

	def __init__(self, loader_thread_count: int, asset_root: str) -> None:
		self.loader_thread_count = loader_thread_count
		self.asset_root = asset_root

	@classmethod
	def from_dict(cls, data: t.Dict) -> "LoaderConfig":
		"""
		Creates config from a json dict, probably read out of a
		file.

		:raises SchemaError: When the schema library fails validating
		the dict.
		"""
		data = cls.SCHEMA.validate(data)
		return cls(data["loader_thread_count"], data["asset_root"])

	def to_dict(self) -> t.Dict:
		return {
			"loader_thread_count": self.loader_thread_count,
			"asset_root": self.asset_root,
		}

	@classmethod
	def get_default(cls) -> "LoaderConfig":
		return cls(
			loader_thread_count = 4,
			asset_root = "",
		)

	@classmethod
	def load(cls, path: t.Union[str, Path]) -> "LoaderConfig":
		"""
		Loads config from a json file, falling back to the default if
		the file does not exist.

		:raises SchemaError: When the file's content is invalid.
		:raises ValueError: When the file is not valid json.
		"""
		path = Path(path)
		if not path.exists():
			logger.info(f"Config file {path} does not exist, using default.")
			return cls.get_default()

		with path.open("r", encoding="utf-8") as f:
			return cls.from_dict(json.load(f))
