# met_predictor/gate.py

from met_predictor.interpreter import PredictionResult
from met_predictor.met_class import MetClass

DEFAULT_THRESHOLD = 0.6


def gate(result: PredictionResult, threshold=DEFAULT_THRESHOLD) -> MetClass:
    """An uncertain prediction is read as 'not exercising'."""
    if result.confidence < threshold:
        return MetClass.SEDENTARY
    return result.met_class


class ConfidenceGate:
    """
    Minimum-confidence policy, kept apart from the interpreter so callers can
    still see the ungated result next to the gated class.
    """

    def __init__(self, threshold=DEFAULT_THRESHOLD):
        if not (0.0 <= threshold <= 1.0):
            raise ValueError("threshold must be in [0, 1]")
        self.threshold = threshold

    def __call__(self, result: PredictionResult) -> MetClass:
        return gate(result, self.threshold)

    def __repr__(self):
        return f"ConfidenceGate(threshold={self.threshold})"
