# met_predictor/predictor.py
"""
Predictor: validate -> run the engine -> interpret -> gate.

Session lifecycle:
  UNINITIALIZED --init()--> READY --cleanup()--> CLOSED

init() is idempotent and serialized by a lock, so concurrent first calls
create one session. CLOSED is terminal; predictions after cleanup() take the
same fallback path as before init().
"""

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from met_predictor import features as feature_check
from met_predictor.config import PredictorConfig
from met_predictor.gate import ConfidenceGate
from met_predictor.interpreter import FALLBACK, PredictionResult, extract
from met_predictor.met_class import MetClass
from met_predictor.session import (InferenceSession, SessionClosedError, create_session,
                                   load_model_bytes)

log = logging.getLogger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


class Predictor:

    def __init__(self, config: Optional[PredictorConfig] = None,
                 session_factory: Callable[..., InferenceSession] = create_session,
                 width: Optional[int] = None):
        self.config = config or PredictorConfig()
        self.gate = ConfidenceGate(self.config.threshold)
        self.width = width

        self._session_factory = session_factory
        self._session: Optional[InferenceSession] = None
        self._state = SessionState.UNINITIALIZED
        self._lock = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    # ── lifecycle ─────────────────────────────────────────────────────────────

    def init(self, context):
        """
        context : asset directory holding config.model_name, a model file, or model bytes
        Raises EngineError if the model cannot be read or the session cannot be built.
        """
        with self._lock:
            if self._state is SessionState.READY:
                return
            if self._state is SessionState.CLOSED:
                log.warning("init() called on a closed predictor; ignoring")
                return

            model_bytes = load_model_bytes(context, self.config.model_name)
            self._session = self._session_factory(model_bytes, self.config.session_options())
            self._state = SessionState.READY
            log.info("Predictor ready (input=%s)", self._session.input_name)

    def cleanup(self):
        """Best-effort teardown; safe to call repeatedly and before init()."""
        with self._lock:
            session, self._session = self._session, None
            self._state = SessionState.CLOSED
            if session is None:
                return
            try:
                session.close()
                log.info("Predictor session released")
            except Exception:
                log.exception("Error while releasing inference session")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()

    # ── prediction ────────────────────────────────────────────────────────────

    def predict_with_confidence(self, features) -> PredictionResult:
        """Ungated result; (Sedentary, 0.0) for invalid input or no session."""
        batch = feature_check.to_batch(features, self.width)
        if batch is None:
            log.debug("Invalid feature vector, using fallback")
            return FALLBACK

        session = self._session
        if self._state is not SessionState.READY or session is None:
            log.debug("No inference session (%s), using fallback", self._state.value)
            return FALLBACK

        try:
            raw = session.run(batch)
        except SessionClosedError:
            log.debug("Session closed during prediction, using fallback")
            return FALLBACK
        return extract(raw)

    def predict(self, features) -> MetClass:
        return self.gate(self.predict_with_confidence(features))
