import pytest

from met_predictor.outputs import LabelOutput, ProbabilityVector
from met_predictor.predictor import Predictor
from met_predictor.session import InferenceSession


class FakeSession(InferenceSession):
    """Stands in for the engine; returns canned decoded outputs."""

    def __init__(self, outputs=(), fail_on_close=False):
        self.outputs = tuple(outputs)
        self.fail_on_close = fail_on_close
        self.batches = []
        self.closed = 0

    @property
    def input_name(self):
        return "float_input"

    def run(self, batch):
        self.batches.append(batch)
        return self.outputs

    def close(self):
        self.closed += 1
        if self.fail_on_close:
            raise RuntimeError("release failed")


class FakeFactory:

    def __init__(self, session):
        self.session = session
        self.calls = []

    def __call__(self, model_bytes, options=None):
        self.calls.append((model_bytes, options))
        return self.session


VALID_FEATURES = [0.1, 9.7, 0.3, 0.02, 0.03, 0.01, 0.14, 0.17, 0.1]


@pytest.fixture
def make_predictor():
    def make(*outputs, config=None, session=None):
        session = session or FakeSession(outputs)
        factory = FakeFactory(session)
        predictor = Predictor(config, session_factory=factory)
        predictor.init(b"model")
        return predictor, session, factory
    return make


@pytest.fixture
def label_output():
    return LabelOutput(2)


@pytest.fixture
def slot0_probs():
    return ProbabilityVector((0.1, 0.2, 0.65, 0.05))
