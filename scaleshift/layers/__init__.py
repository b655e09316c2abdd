from .Layer import Layer
from .ScaleShift import ScaleShift, init, forward, backward

__all__ = [
    "Layer",
    "ScaleShift",
    "init",
    "forward",
    "backward",
]
