#!/usr/bin/env python3

import re
from setuptools import find_packages, setup


def read_version() -> str:
	with open("asset_queue/__init__.py", "r", encoding="utf-8") as f:
		match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.MULTILINE)
	if match is None:
		raise RuntimeError("Could not find __version__ in asset_queue/__init__.py")
	return match[1]


if __name__ == "__main__":
	setup(
		name = "AssetQueue",
		version = read_version(),
		description = "Background asset preloading queue for pyglet render loops",
		packages = find_packages(include=["asset_queue", "asset_queue.*"]),
		python_requires = ">=3.8",
		install_requires = [
			"loguru",
			"pyglet>=2.0",
			"schema",
		],
		extras_require = {
			"test": ["pytest"],
		},
	)
