# scaleshift/helpers/Backend.py
import numpy as np

VERBOSE_STARTUP = False  # print device details on import

try:
    import cupy as cp
    if VERBOSE_STARTUP:
        print("CuPy:", cp.__version__)
        print("GPU count:", cp.cuda.runtime.getDeviceCount())
    # Quick runtime check
    try:
        _ = (cp.array([1, 2, 3]) + 1).sum()
        CUPY_AVAILABLE = True
    except Exception as e:
        print(f"CuPy installed but CUDA runtime error: {e}")
        print("Falling back to CPU (NumPy)")
        cp = None
        CUPY_AVAILABLE = False
except ImportError:
    cp = None
    CUPY_AVAILABLE = False
    if VERBOSE_STARTUP:
        print("CuPy not available - using NumPy (CPU)")


class ShapeMismatchError(ValueError):
    """Raised when matrix operands disagree on their dimensions."""


class Backend:
    """Dense matrix runtime over NumPy/CuPy."""
    def __init__(self, use_gpu=True, default_float=np.float32):
        self.use_gpu = bool(use_gpu and CUPY_AVAILABLE)
        self.default_float = default_float
        if self.use_gpu:
            self.xp = cp
            if VERBOSE_STARTUP:
                print("Using GPU backend (CuPy)")
        else:
            self.xp = np
            if VERBOSE_STARTUP:
                print("Using CPU backend (NumPy)")

    # -------- device transfer --------
    def to_cpu(self, x):
        """Move array to CPU (NumPy)."""
        if self.use_gpu and x is not None and not isinstance(x, np.ndarray):
            return cp.asnumpy(x)
        return x

    def ensure_array(self, x, dtype=None):
        """
        Ensure 'x' is an array of the current backend.
        Accepts list/tuple/np/cp arrays; returns xp.ndarray.
        """
        if self.use_gpu and isinstance(x, np.ndarray):
            arr = cp.asarray(x)
        elif (not self.use_gpu) and (cp is not None) and isinstance(x, cp.ndarray):
            arr = cp.asnumpy(x)
        else:
            arr = self.xp.asarray(x)
        if dtype is not None and arr.dtype != dtype:
            arr = arr.astype(dtype)
        return arr

    def _fallback_to_cpu(self):
        """Switch to CPU backend when GPU operations fail."""
        self.use_gpu = False
        self.xp = np
        print("Switched to CPU backend (NumPy)")

    # -------- array creation --------
    def zeros(self, *args, **kwargs):
        kwargs.setdefault("dtype", self.default_float)
        try:
            return self.xp.zeros(*args, **kwargs)
        except Exception as e:
            if self.use_gpu:
                print(f"GPU operation failed, falling back to CPU: {e}")
                self._fallback_to_cpu()
                return np.zeros(*args, **kwargs)
            raise

    def ones(self, *args, **kwargs):
        kwargs.setdefault("dtype", self.default_float)
        try:
            return self.xp.ones(*args, **kwargs)
        except Exception as e:
            if self.use_gpu:
                print(f"GPU operation failed, falling back to CPU: {e}")
                self._fallback_to_cpu()
                return np.ones(*args, **kwargs)
            raise

    def zeros_like(self, x):
        try:
            return self.xp.zeros_like(x)
        except Exception as e:
            if self.use_gpu:
                print(f"GPU operation failed, falling back to CPU: {e}")
                self._fallback_to_cpu()
                return np.zeros_like(self.to_cpu(x))
            raise

    # -------- shape checks / broadcasting --------
    def check_same_shape(self, a, b):
        if a.shape != b.shape:
            raise ShapeMismatchError(
                f"shape mismatch: {tuple(a.shape)} vs {tuple(b.shape)}"
            )

    def broadcast_row(self, row, like):
        """
        Replicate a (1, D) row over the N rows of an (N, D) matrix.
        Anything other than exactly one row of D columns is rejected,
        so (1, 2) against (N, 1) fails instead of widening to (N, 2).
        """
        if like.ndim != 2:
            raise ShapeMismatchError(
                f"expected a 2-D matrix, got shape {tuple(like.shape)}"
            )
        if row.ndim != 2 or row.shape[0] != 1 or row.shape[1] != like.shape[1]:
            raise ShapeMismatchError(
                f"row of shape {tuple(row.shape)} cannot broadcast over "
                f"matrix of shape {tuple(like.shape)}; expected (1, {like.shape[1]})"
            )
        return self.xp.repeat(row, like.shape[0], axis=0)

    # -------- math (thin wrappers) --------
    def multiply(self, a, b):
        self.check_same_shape(a, b)
        return self.xp.multiply(a, b)

    def add(self, a, b):
        self.check_same_shape(a, b)
        return self.xp.add(a, b)

    def sum(self, x, axis=None, keepdims=False):
        return self.xp.sum(x, axis=axis, keepdims=keepdims)


# Global backend instance - can be overridden
backend = Backend(use_gpu=True)
