
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple
import numpy as np

Point = Tuple[float, float, int]


def freeze_stroke(points) -> np.ndarray:
    """Copies a stroke into a read-only (num_points, 3) float array with columns x, y, t.

    Args:
        points: Anything numpy can turn into a (num_points, 3) array.

    Returns:
        np.ndarray: The frozen stroke.
    """
    try:
        stroke = np.array(points, dtype=np.float64)
    except TypeError as e:
        raise ValueError(f"A stroke must only contain numbers: {e}") from e
    if stroke.size == 0:
        raise ValueError("A stroke needs at least one point")
    if stroke.ndim != 2 or stroke.shape[1] != 3:
        raise ValueError(f"A stroke must have shape (num_points, 3), got {stroke.shape}")
    if np.any(np.diff(stroke[:, 2]) < 0):
        raise ValueError("Stroke timestamps must be non-decreasing")
    stroke.flags.writeable = False
    return stroke


@dataclass(frozen=True)
class Drawing:
    strokes: List[np.ndarray] # List[np.ndarray[shape==(num_points, 3)]] one (x, y, t) row per point, in drawing order

    @staticmethod
    def snapshot(strokes: Iterable[np.ndarray]) -> "Drawing":
        """Takes ownership of a set of strokes by copying them into an immutable drawing.

        Args:
            strokes (Iterable[np.ndarray]): The strokes, e.g. still owned by a capture buffer.

        Returns:
            Drawing: The snapshot.
        """
        return Drawing([freeze_stroke(stroke) for stroke in strokes])

    @staticmethod
    def from_points(strokes: Sequence[Sequence[Point]]) -> "Drawing":
        """Builds a drawing from lists of (x, y, t) triples."""
        return Drawing.snapshot(strokes)

    def is_empty(self) -> bool:
        return len(self.strokes) == 0

    @property
    def num_points(self) -> int:
        return sum([stroke.shape[0] for stroke in self.strokes])

    def to_points(self) -> List[List[List[float]]]:
        return [stroke.tolist() for stroke in self.strokes]
