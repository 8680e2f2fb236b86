import logging
from typing import List, Optional

from handwrecognizer.config.Config import Config
from handwrecognizer.dataset.Drawing import Drawing, Point


class StrokeRecorder:
    """Collects pen events into strokes, the way a touch canvas does.

    Coordinates are divided by the canvas size and, with flip_y, measured from the bottom-left corner.
    The recorder owns its buffer; recognition only ever sees a snapshot of it.
    """

    def __init__(self, canvas_width: float = 1.0, canvas_height: float = 1.0, flip_y: bool = False) -> None:
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.flip_y = flip_y
        self.strokes: List[List[Point]] = []
        self.current: Optional[List[Point]] = None

    def _to_point(self, x: float, y: float, t: int) -> Point:
        if self.flip_y:
            y = self.canvas_height - y
        return (x / self.canvas_width, y / self.canvas_height, t)

    def pen_down(self, x: float, y: float, t: int) -> None:
        self.current = [self._to_point(x, y, t)]

    def pen_move(self, x: float, y: float, t: int) -> None:
        if self.current is None:
            logging.warning("Ignoring pen move without a preceding pen down")
            return
        self.current.append(self._to_point(x, y, t))

    def pen_up(self, x: float, y: float, t: int) -> None:
        if self.current is None:
            logging.warning("Ignoring pen up without a preceding pen down")
            return
        self.current.append(self._to_point(x, y, t))
        self.strokes.append(self.current)
        self.current = None

    def snapshot(self) -> Drawing:
        """Returns the finished strokes as an immutable drawing. The stroke in progress is not included."""
        return Drawing.from_points(self.strokes)

    def clear(self) -> None:
        self.strokes = []
        self.current = None

    def __len__(self) -> int:
        return len(self.strokes)

    @staticmethod
    def for_config(config: Config, flip_y: bool = False) -> "StrokeRecorder":
        return StrokeRecorder(config.canvas_width, config.canvas_height, flip_y)
