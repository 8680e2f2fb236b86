import numpy as np

DEFAULT_EPSILON = 1e-9


def normalize_stroke(stroke: np.ndarray, epsilon: float = DEFAULT_EPSILON) -> np.ndarray:
    """Scales the x and y coordinates of a stroke independently into [0, 1]. Timestamps are passed through.

    Args:
        stroke (np.ndarray): The stroke to normalize. Shape == (num_points, 3), columns x, y, t
        epsilon (float): Lower bound of the per axis extent, guards single point and axis degenerate strokes.

    Returns:
        np.ndarray: The normalized stroke. Shape == (num_points, 3)
    """
    assert stroke.ndim == 2 and stroke.shape[1] == 3
    normalized = np.array(stroke, dtype=np.float64)
    mins = normalized[:, :2].min(axis=0) # Shape == (2,)
    extents = np.maximum(normalized[:, :2].max(axis=0) - mins, epsilon) # Shape == (2,)
    normalized[:, :2] = (normalized[:, :2] - mins) / extents
    return normalized
