"""Color policies and the waveform image renderer.

Import from the submodules directly (``wavr.core.render.colors``,
``wavr.core.render.renderer``); the renderer depends on the config models,
which depend on the color policies.
"""
