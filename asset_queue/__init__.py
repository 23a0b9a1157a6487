"""
AssetQueue: preloads named assets in the background while a render
loop keeps drawing a loading screen.

The interesting bits live in ``asset_queue.core``, the loader plugins
that actually fetch and decode media in ``asset_queue.loaders``.
"""

__version__ = "0.1.0"
