"""A small 2D game engine core: events, input, entities, layered scenes and a batching 2D renderer."""

__version__ = "0.1.0"