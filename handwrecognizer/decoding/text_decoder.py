
import logging
from typing import List
import torch

from handwrecognizer.config.codebooks import Codebook
from handwrecognizer.config.Config import Config, DecodeMode
from handwrecognizer.errors import SizeMismatchError


def softmax(logits: torch.Tensor) -> torch.Tensor:
    """Numerically stable softmax over the last dimension.

    Args:
        logits (torch.Tensor): The class scores. Shape == (..., num_classes)

    Returns:
        torch.Tensor: The probabilities. Shape == (..., num_classes)
    """
    exps = torch.exp(logits - logits.max(dim=-1, keepdim=True).values)
    return exps / exps.sum(dim=-1, keepdim=True)


def _flatten_output(output: torch.Tensor, expected_size: int) -> torch.Tensor:
    logits = torch.as_tensor(output).detach().cpu().reshape(-1).float()
    if logits.shape[0] != expected_size:
        raise SizeMismatchError(expected_size, logits.shape[0])
    return logits


def decode_per_slot(output: torch.Tensor, slots: int, num_classes: int, codebook: Codebook) -> str:
    """Greedy per slot decoding: every slot independently becomes the character of its most probable class.

    Repeated characters are kept, there is no blank symbol.

    Args:
        output (torch.Tensor): The classifier output, slots * num_classes values in any shape.
        slots (int): Number of output slots.
        num_classes (int): Number of classes per slot.
        codebook (Codebook): Maps class indices to characters.

    Returns:
        str: One character per slot.
    """
    logits = _flatten_output(output, slots * num_classes).reshape(slots, num_classes) # Shape == (slots, num_classes)
    probabilities = softmax(logits) # Shape == (slots, num_classes)
    # argmax returns the first maximal index on ties
    indices: List[int] = probabilities.argmax(dim=-1).tolist()
    return codebook.decode(indices)


def decode_single_character(output: torch.Tensor, expected_size: int, num_classes: int, codebook: Codebook) -> str:
    """Legacy decoding: the whole output is one distribution that yields exactly one character.

    Args:
        output (torch.Tensor): The classifier output.
        expected_size (int): Number of values the output must have.
        num_classes (int): Number of classes, larger indices become the sentinel whatever the codebook holds.
        codebook (Codebook): Maps class indices to characters, indices without a glyph become the sentinel.

    Returns:
        str: A single character.
    """
    logits = _flatten_output(output, expected_size) # Shape == (expected_size,)
    max_index = int(softmax(logits).argmax().item())
    if max_index >= num_classes or max_index not in codebook.index_to_char:
        logging.warning(f"Class index {max_index} is outside the {num_classes} classes of codebook {codebook.name}")
        return codebook.sentinel
    return codebook.lookup(max_index)


def decode(output: torch.Tensor, config: Config) -> str:
    """Decodes a classifier output with the decode mode of the config.

    Args:
        output (torch.Tensor): The classifier output.
        config (Config): The config.

    Returns:
        str: The recognized text.

    Raises:
        SizeMismatchError: If the output does not have config.output_size values.
    """
    codebook = config.get_codebook()
    if config.decode_mode == DecodeMode.SINGLE_CHARACTER:
        return decode_single_character(output, config.output_size, config.num_classes, codebook)
    return decode_per_slot(output, config.slots, config.num_classes, codebook)
