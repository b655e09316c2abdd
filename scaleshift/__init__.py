from .layers import Layer, ScaleShift, init, forward, backward
from .helpers.Backend import backend, ShapeMismatchError

__all__ = [
    "Layer",
    "ScaleShift",
    "init",
    "forward",
    "backward",
    "backend",
    "ShapeMismatchError",
]
