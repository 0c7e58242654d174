# met_predictor/session.py
"""
Engine adapters. Everything engine-specific stays in this module: a session
takes a 1 x N float32 batch and hands back already-decoded output slots
(see outputs.py), so no engine object outlives a single run() call.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import onnxruntime as ort

from met_predictor.outputs import RawModelOutput, decode_outputs

log = logging.getLogger(__name__)

DEFAULT_PROVIDERS = ("CPUExecutionProvider",)


class EngineError(RuntimeError):
    """The inference engine itself failed: bad model, allocation failure, run error."""


class SessionClosedError(EngineError):
    """run() was called on a session that has already been released."""


class InferenceSession:
    """What the Predictor needs from an engine session."""

    @property
    def input_name(self) -> str:
        raise NotImplementedError

    def run(self, batch: np.ndarray) -> RawModelOutput:
        raise NotImplementedError

    def close(self):
        pass


class OnnxSession(InferenceSession):
    """Wraps an onnxruntime.InferenceSession built from in-memory model bytes."""

    def __init__(self, model_bytes: bytes,
                 providers: Sequence[str] = DEFAULT_PROVIDERS,
                 intra_op_threads: Optional[int] = None):
        options = ort.SessionOptions()
        if intra_op_threads is not None:
            options.intra_op_num_threads = intra_op_threads

        try:
            self._session = ort.InferenceSession(
                model_bytes, sess_options=options, providers=list(providers)
            )
        except Exception as e:
            raise EngineError(f"Could not create ONNX session: {e}") from e

        self._input_name = self._session.get_inputs()[0].name
        log.info("ONNX session ready (input=%s, outputs=%s, providers=%s)",
                 self._input_name,
                 [o.name for o in self._session.get_outputs()],
                 self._session.get_providers())

    @property
    def input_name(self) -> str:
        return self._input_name

    def run(self, batch: np.ndarray) -> RawModelOutput:
        # close() may run concurrently; keep one reference for the whole call
        session = self._session
        if session is None:
            raise SessionClosedError("ONNX session is closed")

        outputs = None
        try:
            try:
                outputs = session.run(None, {self._input_name: batch})
            except Exception as e:
                raise EngineError(f"ONNX inference failed: {e}") from e
            return decode_outputs(outputs)
        finally:
            del outputs

    def close(self):
        self._session = None


def load_model_bytes(context, model_name: str) -> bytes:
    """
    context : model bytes, a model file, or an asset directory holding model_name
    """
    if isinstance(context, (bytes, bytearray)):
        return bytes(context)

    path = Path(context)
    if path.is_dir():
        path = path / model_name
    try:
        return path.read_bytes()
    except OSError as e:
        raise EngineError(f"Could not read model asset {path}: {e}") from e


def create_session(model_bytes: bytes, options=None) -> InferenceSession:
    """Default session factory: an ONNX Runtime session."""
    options = options or {}
    return OnnxSession(
        model_bytes,
        providers=options.get("providers", DEFAULT_PROVIDERS),
        intra_op_threads=options.get("intra_op_threads"),
    )
