# met_predictor/keras_session.py

import os
import tempfile

import numpy as np
from tensorflow import keras

from met_predictor.outputs import RawModelOutput, decode_slot
from met_predictor.session import EngineError, InferenceSession, SessionClosedError


class KerasSession(InferenceSession):
    """
    Wraps a trained Keras MET model.
    Responsible ONLY for neural inference; its softmax output becomes the
    slot-0 probability vector.
    """

    def __init__(self, model_path):
        try:
            self.model = keras.models.load_model(model_path)
        except Exception as e:
            raise EngineError(f"Could not load Keras model {model_path}: {e}") from e

    @property
    def input_name(self) -> str:
        return self.model.inputs[0].name

    def run(self, batch: np.ndarray) -> RawModelOutput:
        """
        Inputs:
            batch -> shape (1, N)

        Returns:
            (ProbabilityVector,) built from the (1, 4) softmax output
        """
        model = self.model
        if model is None:
            raise SessionClosedError("Keras session is closed")

        try:
            preds = model.predict(batch, verbose=0)
        except Exception as e:
            raise EngineError(f"Keras inference failed: {e}") from e

        return (decode_slot(preds),)

    def close(self):
        self.model = None


def create_keras_session(model_bytes: bytes, options=None) -> InferenceSession:
    """Session factory for Predictor; load_model needs a file, so the bytes are staged on disk."""
    suffix = (options or {}).get("suffix", ".keras")
    fd, path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(model_bytes)
        return KerasSession(path)
    finally:
        os.remove(path)
