import matplotlib.pyplot as plt
import numpy as np


def build_error_map(results, width, height):
    """
    Arrange per-sample distances on the canvas grid

    Args:
        results: Iterable of EvaluationResult
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        (height, width) array, cell [y, x] holds the error for label (x, y)
    """
    error_map = np.full((height, width), np.nan, dtype=np.float32)
    for result in results:
        error_map[result.label_y, result.label_x] = result.distance
    return error_map


def plot_error_map(error_map):
    """Show the prediction error at every block position"""
    plt.figure(figsize=(6, 5))
    plt.imshow(error_map, cmap='hot')
    plt.colorbar(label="Distance (px)")
    plt.title(f"Prediction Error (max {np.nanmax(error_map):.2f} px)")
    plt.xlabel("x")
    plt.ylabel("y")
    plt.tight_layout()
    plt.show()
