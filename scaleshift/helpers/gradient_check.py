"""Finite-difference verification of the scale-shift backward pass."""
import numpy as np

from .Backend import backend
from ..layers.ScaleShift import forward, backward


def relative_error(a, b, eps=1e-8):
    a = backend.to_cpu(a)
    b = backend.to_cpu(b)
    return float(np.abs(a - b).sum() / (np.abs(a).sum() + eps))


def numerical_gradient(f, x, dout, h=1e-5):
    """
    Central-difference gradient of sum(f() * dout) with respect to x.

    Args:
        f: callable with no arguments, reads x by reference
        x: array perturbed in place, restored before returning
        dout: upstream gradient, same shape as f()'s output
        h: step size

    Returns:
        array shaped like x
    """
    grad = np.zeros_like(x)
    it = np.nditer(x, flags=["multi_index"], op_flags=["readwrite"])
    while not it.finished:
        idx = it.multi_index
        old = x[idx]
        x[idx] = old + h
        pos = backend.to_cpu(f())
        x[idx] = old - h
        neg = backend.to_cpu(f())
        x[idx] = old
        grad[idx] = np.sum((pos - neg) * dout) / (2.0 * h)
        it.iternext()
    return grad


def gradient_check(X, gamma, beta, dout=None, h=1e-5, seed=None, logger=None, step=0):
    """
    Compare backward() against numerical gradients for X, gamma and beta.

    Inputs are copied to float64 NumPy arrays; the caller's arrays are not
    touched. When dout is None a random upstream gradient is drawn.
    When a RunLogger is given, the errors are recorded under `step`.

    Returns:
        dict with relative errors under 'dX', 'dgamma', 'dbeta'
    """
    X = np.array(backend.to_cpu(X), dtype=np.float64)
    gamma = np.array(backend.to_cpu(gamma), dtype=np.float64)
    beta = np.array(backend.to_cpu(beta), dtype=np.float64)
    if dout is None:
        rng = np.random.default_rng(seed)
        dout = rng.standard_normal(X.shape)
    dout = np.array(backend.to_cpu(dout), dtype=np.float64)

    out = forward(X, gamma, beta)
    dX, dgamma, dbeta = backward(dout, out, X, gamma, beta)

    f = lambda: forward(X, gamma, beta)
    num_dX = numerical_gradient(f, X, dout, h=h)
    num_dgamma = numerical_gradient(f, gamma, dout, h=h)
    num_dbeta = numerical_gradient(f, beta, dout, h=h)

    errors = {
        "dX": relative_error(num_dX, dX),
        "dgamma": relative_error(num_dgamma, dgamma),
        "dbeta": relative_error(num_dbeta, dbeta),
    }
    if logger is not None:
        logger.log_check(step, **errors)
    return errors
