import numpy as np
import pytest

from scaleshift.helpers.Backend import Backend, ShapeMismatchError


@pytest.fixture
def cpu_backend():
    return Backend(use_gpu=False)


def test_broadcast_row(cpu_backend):
    row = np.array([[1.0, 2.0, 3.0]])
    like = np.zeros((4, 3))
    out = cpu_backend.broadcast_row(row, like)
    assert out.shape == (4, 3)
    assert np.array_equal(out, np.tile(row, (4, 1)))


@pytest.mark.parametrize("row_shape, like_shape", [
    ((1, 2), (3, 1)),
    ((1, 4), (3, 3)),
    ((2, 3), (3, 3)),
    ((3,), (3, 3)),
])
def test_broadcast_row_rejects(cpu_backend, row_shape, like_shape):
    with pytest.raises(ShapeMismatchError):
        cpu_backend.broadcast_row(np.ones(row_shape), np.ones(like_shape))


def test_broadcast_row_rejects_non_matrix(cpu_backend):
    with pytest.raises(ShapeMismatchError):
        cpu_backend.broadcast_row(np.ones((1, 3)), np.ones(3))


def test_elementwise_requires_same_shape(cpu_backend):
    with pytest.raises(ShapeMismatchError):
        cpu_backend.multiply(np.ones((2, 3)), np.ones((1, 3)))
    with pytest.raises(ShapeMismatchError):
        cpu_backend.add(np.ones((2, 3)), np.ones((2, 2)))


def test_creation_uses_default_float(cpu_backend):
    assert cpu_backend.ones((1, 3)).dtype == np.float32
    assert cpu_backend.zeros((1, 3)).dtype == np.float32
    b64 = Backend(use_gpu=False, default_float=np.float64)
    assert b64.ones((1, 3)).dtype == np.float64


def test_ensure_array(cpu_backend):
    arr = cpu_backend.ensure_array([[1, 2]], dtype=np.float32)
    assert isinstance(arr, np.ndarray)
    assert arr.dtype == np.float32
    assert cpu_backend.to_cpu(arr) is arr


def test_unknown_attributes_are_not_forwarded(cpu_backend):
    # only the wrapped operations are exposed, not the whole array module
    with pytest.raises(AttributeError):
        cpu_backend.matmul
    with pytest.raises(AttributeError):
        cpu_backend.seed


def test_sum_keepdims(cpu_backend):
    x = np.arange(6.0).reshape(2, 3)
    assert np.array_equal(cpu_backend.sum(x, axis=0, keepdims=True), [[3.0, 5.0, 7.0]])
    assert cpu_backend.sum(x) == 15.0
