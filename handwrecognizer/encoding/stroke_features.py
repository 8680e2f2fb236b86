
from typing import Tuple
import numpy as np

from handwrecognizer.encoding.FeatureSchema import FeatureBlockBuilder
from handwrecognizer.encoding.normalizer import DEFAULT_EPSILON, normalize_stroke
from handwrecognizer.errors import EncodeError

MIN_ENDPOINT_NORM = 0.001


def segment_directions(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Direction angle of every segment between consecutive points. Shape == (num_points - 1,)"""
    return np.arctan2(np.diff(y), np.diff(x))


def turning_angles(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Absolute direction change at every interior point. Shape == (max(num_points - 2, 0),)"""
    return np.abs(np.diff(segment_directions(x, y)))


def total_length(x: np.ndarray, y: np.ndarray) -> float:
    """Sum of the euclidean distances between consecutive points."""
    return float(np.sum(np.hypot(np.diff(x), np.diff(y))))


def directness(x: np.ndarray, y: np.ndarray) -> float:
    """Distance between the first and the last point divided by the path length, 0 for a path of length 0."""
    length = total_length(x, y)
    if length == 0:
        return 0.0
    return float(np.hypot(x[-1] - x[0], y[-1] - y[0]) / length)


def total_curvature(x: np.ndarray, y: np.ndarray) -> float:
    return float(np.sum(turning_angles(x, y)))


def average_sin_cos(thetas: np.ndarray) -> Tuple[float, float]:
    """Mean sine and cosine of a set of angles. NaN for an empty set, the caller scrubs it."""
    return np.sum(np.sin(thetas)) / thetas.shape[0], np.sum(np.cos(thetas)) / thetas.shape[0]


def endpoint_diff(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    return np.array([x[-1] - x[0], y[-1] - y[0]])


def control_point_distributions(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Distance of every interior point to the first point, relative to the endpoint distance.

    Args:
        x (np.ndarray): Normalized x coordinates. Shape == (num_points,)
        y (np.ndarray): Normalized y coordinates. Shape == (num_points,)

    Returns:
        np.ndarray: The distributions. Shape == (max(num_points - 2, 0),)
    """
    norm = max(float(np.linalg.norm(endpoint_diff(x, y))), MIN_ENDPOINT_NORM)
    return np.hypot(x[1:-1] - x[0], y[1:-1] - y[0]) / norm


def angles(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Angle of every interior point as seen from the first point. Shape == (max(num_points - 2, 0),)"""
    return np.arctan2(y[1:-1] - y[0], x[1:-1] - x[0])


def time_coefficients(t: np.ndarray) -> np.ndarray:
    """Relative time of every interior point within the stroke. Zero duration strokes divide by zero, the caller scrubs it.

    Args:
        t (np.ndarray): Timestamps. Shape == (num_points,)

    Returns:
        np.ndarray: The coefficients. Shape == (max(num_points - 2, 0),)
    """
    return (t[1:-1] - t[0]) / (t[-1] - t[0])


def encode_stroke(stroke: np.ndarray, pen_up_flag: float = 1.0, epsilon: float = DEFAULT_EPSILON) -> np.ndarray:
    """Normalizes a stroke and encodes it into a FeatureBlock.

    Non-finite values (degenerate strokes) are replaced by 0.0.

    Args:
        stroke (np.ndarray): The raw stroke. Shape == (num_points, 3), columns x, y, t
        pen_up_flag (float): Constant emitted as the last value of the block.
        epsilon (float): Normalization guard, see normalize_stroke.

    Returns:
        np.ndarray: The FeatureBlock. Shape == (block_length(num_points),)
    """
    if stroke.ndim != 2 or stroke.shape[1] != 3 or stroke.shape[0] == 0:
        raise EncodeError(f"Cannot encode a stroke of shape {stroke.shape}")

    normalized = normalize_stroke(stroke, epsilon)
    x, y, t = normalized[:, 0], normalized[:, 1], normalized[:, 2]

    with np.errstate(divide="ignore", invalid="ignore"):
        sin_direction, cos_direction = average_sin_cos(segment_directions(x, y))
        sin_curvature, cos_curvature = average_sin_cos(turning_angles(x, y))
        builder = FeatureBlockBuilder(stroke.shape[0])
        builder.add("length", total_length(x, y))
        builder.add("directness", directness(x, y))
        builder.add("curvature", total_curvature(x, y))
        builder.add("sin_direction", sin_direction)
        builder.add("cos_direction", cos_direction)
        builder.add("sin_curvature", sin_curvature)
        builder.add("cos_curvature", cos_curvature)
        builder.add("endpoint_diff", endpoint_diff(x, y))
        builder.add("control_point_distribution", control_point_distributions(x, y))
        builder.add("angles", angles(x, y))
        builder.add("time_coefficients", time_coefficients(t))
        builder.add("pen_up_flag", pen_up_flag)
        return builder.build()
