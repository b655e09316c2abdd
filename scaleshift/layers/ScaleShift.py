from .Layer import Layer
from ..helpers.Backend import backend


def init(num_features, dtype=None):
    # gamma: (1, D) ones, beta: (1, D) zeros -> identity transform
    dtype = dtype or backend.default_float
    gamma = backend.ones((1, num_features), dtype=dtype)
    beta = backend.zeros((1, num_features), dtype=dtype)
    return gamma, beta


def forward(X, gamma, beta):
    """
    X: (N, D), gamma: (1, D), beta: (1, D)
    returns: out (N, D) with out[i, j] = X[i, j] * gamma[0, j] + beta[0, j]
    """
    X = backend.ensure_array(X)
    gamma = backend.ensure_array(gamma)
    beta = backend.ensure_array(beta)

    gamma_b = backend.broadcast_row(gamma, X)  # (N, D)
    beta_b = backend.broadcast_row(beta, X)    # (N, D)
    return backend.add(backend.multiply(X, gamma_b), beta_b)


def backward(dout, out, X, gamma, beta):
    """
    dout: (N, D) upstream gradient
    out, beta: unused, kept so every layer's backward takes the same arguments
    returns: (dX (N, D), dgamma (1, D), dbeta (1, D))
    """
    dout = backend.ensure_array(dout)
    X = backend.ensure_array(X)
    gamma = backend.ensure_array(gamma)

    dgamma = backend.sum(backend.multiply(dout, X), axis=0, keepdims=True)  # (1, D)
    dbeta = backend.sum(dout, axis=0, keepdims=True)                        # (1, D)
    dX = backend.multiply(dout, backend.broadcast_row(gamma, dout))         # (N, D)
    return dX, dgamma, dbeta


class ScaleShift(Layer):
    def __init__(self, num_features, dtype=None):
        self.num_features = num_features
        self.gamma, self.beta = init(num_features, dtype=dtype)

        # grads (filled during backward)
        self.dgamma = backend.zeros_like(self.gamma)
        self.dbeta = backend.zeros_like(self.beta)

        self.x = None
        self.out = None

    def forward(self, x, training=False):
        # x shape: (batch, num_features)
        # return: (batch, num_features)
        self.x = backend.ensure_array(x)  # cache for backward
        self.out = forward(self.x, self.gamma, self.beta)
        return self.out

    def backward(self, grad_out):
        if self.x is None:
            raise ValueError("Must call forward() before backward()")
        dX, dgamma, dbeta = backward(grad_out, self.out, self.x, self.gamma, self.beta)
        self.dgamma[...] = dgamma
        self.dbeta[...] = dbeta
        return dX

    def params(self):
        return [self.gamma, self.beta]

    def grads(self):
        return [self.dgamma, self.dbeta]
