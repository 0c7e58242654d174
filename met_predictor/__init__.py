from met_predictor.config import PredictorConfig, load_config, save_config
from met_predictor.features import validate
from met_predictor.gate import DEFAULT_THRESHOLD, ConfidenceGate, gate
from met_predictor.interpreter import PredictionResult, argmax, extract, index_of_max
from met_predictor.met_class import MetClass
from met_predictor.outputs import LabelOutput, ProbabilityMap, ProbabilityVector
from met_predictor.predictor import Predictor, SessionState
from met_predictor.session import EngineError, InferenceSession, SessionClosedError
from met_predictor.tracker import ActivitySession, ActivityTracker, DailySummary
