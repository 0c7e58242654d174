# met_predictor/features.py

from typing import Optional

import numpy as np


def to_batch(features, width=None) -> Optional[np.ndarray]:
    """
    Builds the 1 x N float32 batch the engine receives, or None if the
    features are not fit for inference.

    features : 1-D sequence or np.ndarray of reals
    width    : expected input width of the model, or None to skip the check
    returns  : None for None, empty, non-numeric, non-1-D or non-finite input.
               Finiteness is checked after the float32 cast, so values that
               overflow float32 are rejected too.
    """
    if features is None:
        return None

    try:
        raw = np.asarray(features)
    except (TypeError, ValueError, OverflowError):
        return None

    # strings, objects (e.g. ints too large for any float) and bools are not features
    if raw.dtype.kind not in "iuf":
        return None

    if raw.ndim != 1 or raw.size == 0:
        return None

    if width is not None and raw.size != width:
        return None

    with np.errstate(over="ignore"):
        arr = raw.astype(np.float32)

    if not np.all(np.isfinite(arr)):
        return None

    # 1 x N
    return arr.reshape(1, -1)


def validate(features, width=None) -> bool:
    """Checks a feature vector before it is sent to inference."""
    return to_batch(features, width) is not None
