

import json
import os

from handwrecognizer.dataset.Drawing import Drawing


def save_drawing_json(drawing: Drawing, path: str) -> None:
    """Saves a drawing as a json list of strokes, each a list of [x, y, t] triples.

    Args:
        drawing (Drawing): The drawing to save.
        path (str): The path to save the drawing to.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w") as f:
        json.dump(drawing.to_points(), f)


def load_drawing_json(path: str) -> Drawing:
    """Loads a drawing saved by save_drawing_json or dumped by a capture buffer.

    Args:
        path (str): The path to load the drawing from.

    Returns:
        Drawing: The loaded drawing.
    """
    with open(path) as f:
        strokes = json.load(f)
    if not isinstance(strokes, list):
        raise ValueError(f"{path} does not contain a list of strokes")
    return Drawing.from_points(strokes)
