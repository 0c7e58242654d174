# met_predictor/cli.py

import argparse
import dataclasses
import logging
import sys

from met_predictor.config import PredictorConfig, load_config
from met_predictor.predictor import Predictor
from met_predictor.session import EngineError


def parse_features(text):
    try:
        return [float(v) for v in text.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a comma-separated list of numbers: {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="met_predictor",
        description="Classify one feature vector into a MET activity class",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m met_predictor --model assets/ --features 0.1,9.8,0.2,0.01,0.02,0.01,0.1,0.14,0.1
  python -m met_predictor --model rf.onnx --features "..." --threshold 0.7
        """
    )
    parser.add_argument(
        '--model',
        required=True,
        help='ONNX model file, or asset directory holding the configured model name'
    )
    parser.add_argument(
        '--features',
        required=True,
        type=parse_features,
        help='Comma-separated feature values'
    )
    parser.add_argument(
        '--threshold',
        type=float,
        default=None,
        help='Minimum confidence to trust the prediction (default: from config, 0.6)'
    )
    parser.add_argument(
        '--config',
        default=None,
        help='joblib-pickled predictor config'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s:     %(message)s')

    config = load_config(args.config) if args.config else PredictorConfig()
    if args.threshold is not None:
        try:
            config = dataclasses.replace(config, threshold=args.threshold)
        except ValueError as e:
            parser.error(str(e))

    try:
        with Predictor(config) as predictor:
            predictor.init(args.model)
            result = predictor.predict_with_confidence(args.features)
            gated = predictor.predict(args.features)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Prediction: {result.met_class} ({result.confidence:.2%})")
    print(f"Gated (threshold {config.threshold}): {gated}")
    return 0
