from collections import namedtuple

import numpy as np
import pandas as pd

EvaluationResult = namedtuple('EvaluationResult', ['pred_x', 'pred_y', 'label_x', 'label_y', 'distance'])

def euclidean_distance(a, b):
    """Straight-line distance between two (x, y) points, rounded to float32

    Differences are taken in single precision and squared in double, matching
    the model's float32 outputs.
    """
    dx = np.float32(a[0]) - np.float32(b[0])
    dy = np.float32(a[1]) - np.float32(b[1])
    return float(np.float32(np.sqrt(np.float64(dx)**2 + np.float64(dy)**2)))

def format_result(result):
    """Prediction, label and distance separated by ' | '"""
    return (f"{result.pred_x:g} {result.pred_y:g} | "
            f"{result.label_x} {result.label_y} | "
            f"{result.distance:g}")

def summarize(results):
    """Distance statistics over all evaluated samples"""
    df = pd.DataFrame(results, columns=EvaluationResult._fields)
    stats = df['distance'].astype(float).describe()
    return {
        'count': int(stats['count']),
        'mean': float(stats['mean']),
        'median': float(stats['50%']),
        'max': float(stats['max']),
    }
