# met_predictor/outputs.py
"""
Decoded model outputs.

An engine run produces up to two output slots. Each slot is decoded once, at
the engine boundary, into one of three encodings:

  LabelOutput       - the engine already classified; a single class index
  ProbabilityVector - per-class scores in MetClass index order (row 0 of 1 x K)
  ProbabilityMap    - class name -> score, unordered

A slot the decoder does not recognize becomes None, so the interpreter only
ever sees these three types.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

import numpy as np

from met_predictor.met_class import MetClass


@dataclass(frozen=True)
class LabelOutput:
    index: int


@dataclass(frozen=True)
class ProbabilityVector:
    scores: Tuple[float, ...]


@dataclass(frozen=True)
class ProbabilityMap:
    scores: Dict[str, float] = field(default_factory=dict)


Slot = Optional[Union[LabelOutput, ProbabilityVector, ProbabilityMap]]
RawModelOutput = Tuple[Slot, ...]


def _decode_map(value) -> Optional[ProbabilityMap]:
    # ZipMap outputs arrive as one dict per batch row
    if isinstance(value, (list, tuple)):
        if not value or not isinstance(value[0], dict):
            return None
        value = value[0]

    scores = {}
    for key, score in value.items():
        if isinstance(key, (int, np.integer)):
            try:
                key = MetClass.from_index(int(key)).label
            except ValueError:
                continue
        try:
            scores[str(key)] = float(score)
        except (TypeError, ValueError):
            # a map with non-numeric scores is not a probability map
            return None
    return ProbabilityMap(scores)


def decode_slot(value) -> Slot:
    """Turn one raw engine output into a LabelOutput, ProbabilityVector, ProbabilityMap or None."""
    if value is None:
        return None

    if isinstance(value, dict) or (
        isinstance(value, (list, tuple)) and value and isinstance(value[0], dict)
    ):
        return _decode_map(value)

    arr = np.asarray(value)
    if arr.size == 0:
        return None

    if np.issubdtype(arr.dtype, np.integer):
        return LabelOutput(int(arr.reshape(-1)[0]))

    if np.issubdtype(arr.dtype, np.floating):
        row = arr.reshape(-1) if arr.ndim <= 1 else arr.reshape(arr.shape[0], -1)[0]
        return ProbabilityVector(tuple(float(p) for p in row))

    return None


def decode_outputs(values) -> RawModelOutput:
    """Decode every output slot an engine run returned."""
    return tuple(decode_slot(v) for v in values)
