import logging
from typing import List
import numpy as np
import torch
from handwrecognizer.config.Config import Config
from handwrecognizer.dataset.Drawing import Drawing
from handwrecognizer.encoding.stroke_features import encode_stroke


def encode_drawing(drawing: Drawing, config: Config) -> List[np.ndarray]:
    """Encodes every stroke of a drawing into its FeatureBlock, in drawing order.

    Args:
        drawing (Drawing): The drawing to encode.
        config (Config): The config.

    Returns:
        List[np.ndarray]: One FeatureBlock per stroke.
    """
    return [encode_stroke(stroke, config.pen_up_flag, config.epsilon) for stroke in drawing.strokes]


def assemble_feature_vector(blocks: List[np.ndarray], input_size: int) -> torch.Tensor:
    """Concatenates FeatureBlocks and pads them with zeros or truncates them to exactly input_size values.

    Truncation may cut a block in the middle of a stroke.

    Args:
        blocks (List[np.ndarray]): The FeatureBlocks.
        input_size (int): The length of the resulting vector.

    Returns:
        torch.Tensor: The FeatureVector. Shape == (input_size,)
    """
    feature_vector = torch.zeros(input_size, dtype=torch.float32)
    if len(blocks) == 0:
        return feature_vector
    values = torch.from_numpy(np.concatenate(blocks)).float()
    if values.shape[0] > input_size:
        logging.debug(f"Truncating {values.shape[0]} feature values to {input_size}")
    n = min(values.shape[0], input_size)
    feature_vector[:n] = values[:n]
    return feature_vector


def generate_input_tensor(drawing: Drawing, config: Config) -> torch.Tensor:
    """Generates the classifier input for a drawing.

    Args:
        drawing (Drawing): The drawing.
        config (Config): The config.

    Returns:
        torch.Tensor: The input tensor. Shape == (1, slots, slot_width)
    """
    feature_vector = assemble_feature_vector(encode_drawing(drawing, config), config.input_size)
    return feature_vector.reshape(config.input_shape)
