# met_predictor/config.py
"""
Predictor settings. Persisted the same way as the preprocessing config of the
training pipeline: a plain dict pickled with joblib.
"""

import logging
from dataclasses import asdict, dataclass, fields
from typing import Optional, Tuple

import joblib

log = logging.getLogger(__name__)


@dataclass
class PredictorConfig:
    model_name: str = "rf.onnx"
    threshold: float = 0.6
    providers: Tuple[str, ...] = ("CPUExecutionProvider",)
    intra_op_threads: Optional[int] = None
    switch_margin: float = 0.1
    min_session_seconds: float = 30.0

    def __post_init__(self):
        if not (0.0 <= self.threshold <= 1.0):
            raise ValueError("threshold must be in [0, 1]")
        if self.switch_margin < 0:
            raise ValueError("switch_margin must be >= 0")
        if self.min_session_seconds < 0:
            raise ValueError("min_session_seconds must be >= 0")
        self.providers = tuple(self.providers)

    def session_options(self) -> dict:
        return {"providers": self.providers, "intra_op_threads": self.intra_op_threads}


def load_config(path) -> PredictorConfig:
    saved = joblib.load(path)
    known = {f.name for f in fields(PredictorConfig)}

    unknown = sorted(set(saved) - known)
    if unknown:
        log.warning("Ignoring unknown config keys in %s: %s", path, unknown)

    return PredictorConfig(**{k: v for k, v in saved.items() if k in known})


def save_config(config: PredictorConfig, path):
    joblib.dump(asdict(config), path)
