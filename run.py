#!/usr/bin/env python3

import argparse
import sys
from time import perf_counter, sleep
import typing as t


def setup_logger(debug_level: int) -> None:
	from loguru import logger

	logger.remove()
	if not sys.stderr:
		return

	_stderr_fmt = (
		"<green>{time:MMM DD HH:mm:ss.SSS}</green> | <level>{level:<8}</level> | "
		"<cyan>{name}</cyan>:<cyan>{function}</cyan>@<cyan>{line}</cyan> - "
		"<level>{message}</level>"
	)
	level = ("INFO", "DEBUG", "TRACE")[max(0, min(debug_level, 2))]
	logger.add(sys.stderr, format=_stderr_fmt, level=level)


def preload(names: t.Sequence[str], fps: float = 60.0) -> bool:
	"""
	Preloads the given assets, ticking pyglet's default clock like a
	game would while drawing its loading screen.
	Returns whether every asset loaded successfully.
	"""
	from loguru import logger
	from pyglet import clock

	from asset_queue.core.asset_queue import AssetQueue
	from asset_queue.loaders import threaded
	from asset_queue.loaders.files import BytesLoader, JSONLoader, TextLoader

	assets = AssetQueue()
	for loader in (BytesLoader, TextLoader, JSONLoader):
		assets.register_loader(loader)

	assets.push_handlers(
		on_load_started = lambda ev: logger.info(f"Load started: {ev.total} assets"),
		on_load_progress = lambda ev: logger.info(f"[{ev.current}/{ev.total}] {ev.name}"),
		on_load_error = lambda ev: logger.error(f"Failed loading {ev.name}"),
		on_load_finished = lambda ev: logger.info(f"Load finished: {ev.current}/{ev.total}"),
	)

	assets.add_all(names)

	start_time = perf_counter()
	frame_time = 1.0 / fps
	try:
		while not assets.update():
			clock.tick()
			sleep(frame_time)
	finally:
		threaded.shutdown(wait=False)

	logger.debug(f"Loading took {perf_counter() - start_time:>.4f}s")
	return all(assets.is_loaded(name) for name in names)


def main():
	argparser = argparse.ArgumentParser(
		description = "Preloads assets through an AssetQueue, logging its progress.",
	)
	argparser.add_argument(
		"assets",
		nargs = "+",
		help = "Asset names to load; file paths or data URIs.",
	)
	argparser.add_argument(
		"--config",
		"-c",
		default = "asset_queue.json",
		help = "JSON file with loader settings. Defaults are used if it does not exist.",
	)
	argparser.add_argument(
		"--debug",
		"-d",
		action = "count",
		default = 0,
		help = (
			"Raises the log level. Once for debug messages, twice to also see the "
			"queue's trace messages."
		),
	)

	result = argparser.parse_args()

	setup_logger(result.debug)

	from asset_queue.config import LoaderConfig
	from asset_queue.loaders import threaded
	threaded.configure(LoaderConfig.load(result.config))

	sys.exit(0 if preload(result.assets) else 1)


if __name__ == "__main__":
	main()
