from .Backend import backend, Backend, ShapeMismatchError

__all__ = [
    "backend",
    "Backend",
    "ShapeMismatchError",
]
