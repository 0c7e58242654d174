import pytest

from met_predictor.interpreter import FALLBACK, PredictionResult, argmax, extract, index_of_max
from met_predictor.met_class import MetClass
from met_predictor.outputs import LabelOutput, ProbabilityMap, ProbabilityVector


def test_slot0_label_is_fully_confident():
    assert extract((LabelOutput(2),)) == PredictionResult(MetClass.MODERATE, 1.0)


def test_slot0_label_wins_over_slot1_probabilities():
    raw = (LabelOutput(1), ProbabilityVector((0.0, 0.0, 0.0, 1.0)))
    assert extract(raw) == PredictionResult(MetClass.LIGHT, 1.0)


def test_slot0_probabilities():
    result = extract((ProbabilityVector((0.1, 0.2, 0.65, 0.05)),))
    assert result.met_class is MetClass.MODERATE
    assert result.confidence == pytest.approx(0.65)


def test_slot1_vector():
    raw = (None, ProbabilityVector((0.05, 0.05, 0.1, 0.8)))
    assert extract(raw) == PredictionResult(MetClass.VIGOROUS, 0.8)


def test_slot1_map_ignores_unknown_keys():
    raw = (None, ProbabilityMap({"Light": 0.4, "Running": 0.99, "Vigorous": 0.35}))
    assert extract(raw) == PredictionResult(MetClass.LIGHT, 0.4)


def test_slot1_map_tie_goes_to_lowest_index():
    scores = {"Sedentary": 0.3, "Light": 0.3, "Moderate": 0.3, "Vigorous": 0.1}
    assert extract((None, ProbabilityMap(scores))).met_class is MetClass.SEDENTARY

    scores = {"Sedentary": 0.1, "Light": 0.4, "Moderate": 0.4, "Vigorous": 0.1}
    assert extract((None, ProbabilityMap(scores))) == PredictionResult(MetClass.LIGHT, 0.4)


def test_label_in_slot1_alone_is_not_used():
    assert extract((None, LabelOutput(3))) == FALLBACK


@pytest.mark.parametrize("raw", [
    (),
    (None,),
    (None, None),
    (ProbabilityVector(()),),
    (None, ProbabilityMap({})),
    (None, ProbabilityMap({"Walking": 0.9})),
    (ProbabilityMap({"Light": 0.9}),),
])
def test_unrecognized_encodings_fall_back(raw):
    assert extract(raw) == PredictionResult(MetClass.SEDENTARY, 0.0)


def test_out_of_range_label_falls_back():
    assert extract((LabelOutput(9),)) == FALLBACK
    assert extract((ProbabilityVector((0.0, 0.0, 0.0, 0.0, 1.0)),)) == FALLBACK


def test_argmax_first_max_wins():
    assert argmax([0.9]) == 0
    assert argmax([0.2, 0.4, 0.4]) == 1
    assert argmax([0.5, 0.5]) == 0


def test_index_of_max_skips_missing_keys():
    assert index_of_max({"Moderate": 0.0}) == (2, 0.0)
    assert index_of_max({}) == (None, 0.0)
