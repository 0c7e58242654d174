# met_predictor/interpreter.py
"""
Normalizes decoded model outputs into a single (class, confidence) result.

Precedence, first match wins:
  1. slot 0 LabelOutput        -> that class, confidence 1.0
  2. slot 0 ProbabilityVector  -> argmax, confidence = winning score
  3. slot 1 ProbabilityVector  -> argmax, confidence = winning score
  4. slot 1 ProbabilityMap     -> max over the canonical names
  5. anything else             -> Sedentary, confidence 0.0

Scores are taken as already-normalized probabilities; nothing is renormalized.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from met_predictor.met_class import MetClass
from met_predictor.outputs import LabelOutput, ProbabilityMap, ProbabilityVector, RawModelOutput

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredictionResult:
    met_class: MetClass
    confidence: float


FALLBACK = PredictionResult(MetClass.SEDENTARY, 0.0)


def argmax(scores: Sequence[float]) -> int:
    # first strictly-greater wins: ties go to the lowest index
    best, best_score = 0, scores[0]
    for i in range(1, len(scores)):
        if scores[i] > best_score:
            best, best_score = i, scores[i]
    return best


def index_of_max(scores: Mapping[str, float]) -> Tuple[Optional[int], float]:
    """
    Max over the canonical class names, scanned in index order.
    Unknown keys are ignored; missing keys are skipped, not read as zero.
    Returns (None, 0.0) when no canonical key is present.
    """
    best, best_score = None, 0.0
    for i, name in enumerate(MetClass.labels()):
        score = scores.get(name)
        if score is None:
            continue
        if best is None or score > best_score:
            best, best_score = i, float(score)
    return best, best_score


def _result(index: int, confidence: float) -> PredictionResult:
    try:
        return PredictionResult(MetClass.from_index(index), float(confidence))
    except ValueError:
        log.warning("Model produced class index %d outside 0..%d, using fallback",
                    index, len(MetClass) - 1)
        return FALLBACK


def _from_vector(slot: ProbabilityVector) -> PredictionResult:
    idx = argmax(slot.scores)
    return _result(idx, slot.scores[idx])


def extract(raw: RawModelOutput) -> PredictionResult:
    slot0 = raw[0] if len(raw) > 0 else None
    slot1 = raw[1] if len(raw) > 1 else None

    if isinstance(slot0, LabelOutput):
        return _result(slot0.index, 1.0)

    if isinstance(slot0, ProbabilityVector) and slot0.scores:
        return _from_vector(slot0)

    if isinstance(slot1, ProbabilityVector) and slot1.scores:
        return _from_vector(slot1)

    if isinstance(slot1, ProbabilityMap):
        idx, score = index_of_max(slot1.scores)
        if idx is not None:
            return _result(idx, score)

    log.debug("No recognized output encoding in %d slot(s), using fallback", len(raw))
    return FALLBACK
