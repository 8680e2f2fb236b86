import math

import numpy as np
import pytest
import torch

from handwrecognizer.config.Config import Config
from handwrecognizer.dataset.Drawing import Drawing
from handwrecognizer.encoding.sequence_assembler import assemble_feature_vector, encode_drawing, generate_input_tensor


def test_empty_drawing_gives_zero_vector():
    config = Config()
    input_tensor = generate_input_tensor(Drawing([]), config)
    assert input_tensor.shape == (1, 25, 29)
    assert input_tensor.dtype == torch.float32
    assert torch.count_nonzero(input_tensor) == 0


def test_single_stroke_is_padded_with_zeros():
    config = Config()
    drawing = Drawing.from_points([[(0, 0, 0), (1, 0, 10), (1, 1, 20)]])
    feature_vector = generate_input_tensor(drawing, config).reshape(-1)
    assert feature_vector.shape == (725,)
    assert feature_vector[0].item() == pytest.approx(2.0)
    assert feature_vector[1].item() == pytest.approx(math.sqrt(2) / 2, rel=1e-6)
    assert feature_vector[12].item() == 1.0
    assert torch.count_nonzero(feature_vector[13:]) == 0


def test_blocks_are_concatenated_in_drawing_order():
    config = Config()
    drawing = Drawing.from_points([
        [(0, 0, 0), (1, 0, 10)],
        [(0, 0, 0), (0, 1, 10), (1, 1, 20), (1, 0, 30)],
    ])
    blocks = encode_drawing(drawing, config)
    assert [block.shape[0] for block in blocks] == [10, 16]
    feature_vector = assemble_feature_vector(blocks, config.input_size)
    np.testing.assert_allclose(feature_vector[:10].numpy(), blocks[0], rtol=1e-6)
    np.testing.assert_allclose(feature_vector[10:26].numpy(), blocks[1], rtol=1e-6, atol=1e-7)
    assert torch.count_nonzero(feature_vector[26:]) == 0


def test_long_drawings_are_truncated():
    config = Config()
    stroke = [(i, (i * 7) % 5, i * 10) for i in range(100)]
    drawing = Drawing.from_points([stroke] * 10)
    blocks = encode_drawing(drawing, config)
    assert sum([block.shape[0] for block in blocks]) > config.input_size
    feature_vector = assemble_feature_vector(blocks, config.input_size)
    assert feature_vector.shape == (725,)
    expected = np.concatenate(blocks)[:725]
    np.testing.assert_allclose(feature_vector.numpy(), expected, rtol=1e-6, atol=1e-7)


@pytest.mark.parametrize("slots,slot_width", [(1, 10), (3, 7), (25, 29)])
def test_output_shape_follows_config(slots, slot_width):
    config = Config(slots=slots, slot_width=slot_width)
    drawing = Drawing.from_points([[(0, 0, 0), (0.5, 0.2, 4), (1, 1, 9)]] * 4)
    assert generate_input_tensor(drawing, config).shape == (1, slots, slot_width)
