"""
Loader plugins for the asset queue: the default image loader and a few
renderer-independent ones for raw bytes, text and JSON.
All of them decode on worker threads and report back through a pyglet
clock, see ``asset_queue.loaders.threaded``.
"""
