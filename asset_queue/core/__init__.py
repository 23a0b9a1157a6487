"""
AssetQueue core submodule.
The loader registry, name resolution, the descriptor bookkeeping
and the queue that drives loaders and reports their progress.
Concrete loaders that touch files, threads and pyglet's image
decoders are not in here, see ``asset_queue.loaders``.
"""
