import numpy as np
import pytest

tf = pytest.importorskip("tensorflow")

from met_predictor.keras_session import create_keras_session
from met_predictor.outputs import ProbabilityVector


def test_softmax_output_is_slot0_vector(tmp_path):
    model = tf.keras.Sequential([
        tf.keras.layers.Input(shape=(9,)),
        tf.keras.layers.Dense(4, activation="softmax"),
    ])
    path = tmp_path / "met_model.keras"
    model.save(path)

    session = create_keras_session(path.read_bytes())
    raw = session.run(np.zeros((1, 9), dtype=np.float32))

    assert len(raw) == 1
    assert isinstance(raw[0], ProbabilityVector)
    assert len(raw[0].scores) == 4
    assert sum(raw[0].scores) == pytest.approx(1.0, abs=1e-5)

    session.close()
    assert session.model is None
