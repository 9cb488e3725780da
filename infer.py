import argparse
import os
import sys
import warnings

import yaml

# Suppress TensorFlow logging so stdout/stderr only carry results and diagnostics
os.environ.setdefault('TF_CPP_MIN_LOG_LEVEL', '3')
warnings.filterwarnings("ignore", category=UserWarning)

from dataset_generator import generate_dataset
from models import CoordRegressor, InterpreterBuildError, ModelLoadError
from utils.config import default_config, load_config
from utils.metrics import EvaluationResult, euclidean_distance, format_result, summarize
from utils.visualization import build_error_map, plot_error_map


def evaluate(regressor, images, labels):
    """Yield one EvaluationResult per image, in generation order"""
    for image, (label_x, label_y) in zip(images, labels):
        pred_x, pred_y = regressor.predict(image)
        distance = euclidean_distance((label_x, label_y), (pred_x, pred_y))
        yield EvaluationResult(pred_x, pred_y, label_x, label_y, distance)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Evaluate a TFLite coordinate regressor on synthetic block images")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML file overriding canvas size, block radius and model path")
    parser.add_argument("--model-path", type=str, default=None,
                        help="Path to the .tflite model (default: converted_model.tflite)")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar while generating images")
    parser.add_argument("--summary", action="store_true",
                        help="Print distance statistics after the per-sample results")
    parser.add_argument("--plot", action="store_true",
                        help="Show a heat map of the error at every position")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = load_config(args.config) if args.config else default_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        reason = " ".join(str(e).split())
        print(f"Failed to load the configuration: {args.config} ({reason})", file=sys.stderr)
        return 1
    width = config['data']['image_width']
    height = config['data']['image_height']
    model_path = args.model_path or config['model']['path']

    print("Generating images...")
    images, labels = generate_dataset(width, height, config['data']['block_radius'], progress=args.progress)
    print("Done.")

    try:
        regressor = CoordRegressor.from_file(model_path)
    except (ModelLoadError, InterpreterBuildError) as e:
        print(e, file=sys.stderr)
        return 1

    results = []
    for result in evaluate(regressor, images, labels):
        print(format_result(result))
        results.append(result)

    if args.summary:
        stats = summarize(results)
        print(f"\nSamples: {stats['count']} | Mean Error: {stats['mean']:.4f} px | "
              f"Median: {stats['median']:.4f} px | Max: {stats['max']:.4f} px")

    if args.plot:
        plot_error_map(build_error_map(results, width, height))

    return 0


if __name__ == "__main__":
    sys.exit(main())
