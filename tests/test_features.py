import math

import numpy as np
import pytest

from met_predictor.features import to_batch, validate


def test_valid_vector():
    assert validate([0.1, 9.8, -0.2])
    assert validate(np.array([1.0], dtype=np.float32))


@pytest.mark.parametrize("features", [
    None,
    [],
    np.array([]),
    [0.1, float("nan"), 0.3],
    [math.inf, 0.0],
    [0.0, -math.inf],
    [[0.1, 0.2], [0.3, 0.4]],
    ["a", "b"],
    ["1.0", "2.0"],
    [10**400, 1.0],
    [1e39, 0.0],
    [True, False],
])
def test_invalid_vectors(features):
    assert validate(features) is False


def test_width_mismatch():
    assert validate([1.0, 2.0, 3.0], width=3)
    assert not validate([1.0, 2.0], width=3)


def test_input_not_mutated():
    arr = np.array([1.0, np.nan, 2.0])
    validate(arr)
    assert np.isnan(arr[1]) and arr[0] == 1.0 and arr[2] == 2.0


def test_batch_is_float32_row():
    batch = to_batch([1, 2.5, -3])
    assert batch.shape == (1, 3)
    assert batch.dtype == np.float32


def test_float32_overflow_rejected():
    # finite as float64, inf once cast for the engine
    assert to_batch(np.array([1e39, 0.0])) is None
    assert to_batch([3.0e38, 0.0]) is not None
