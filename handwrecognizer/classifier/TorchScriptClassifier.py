import logging
import os
from typing import Callable, Optional

import torch

from handwrecognizer.errors import ClassifierUnavailableError

Classifier = Callable[[torch.Tensor], torch.Tensor]


class TorchScriptClassifier:
    """Runs a pre-trained TorchScript sequence classifier as an opaque function tensor -> tensor."""

    def __init__(self, module: torch.nn.Module, device: str = "cpu") -> None:
        self.module = module
        self.device = device

    @staticmethod
    def load(model_path: Optional[str], device: str = "cpu") -> "TorchScriptClassifier":
        """Loads a TorchScript module. Files ending with .ptl are loaded with the lite interpreter.

        Args:
            model_path (Optional[str]): Path of the scripted or traced model.
            device (str): Device to run the model on.

        Returns:
            TorchScriptClassifier: The classifier.
        """
        if model_path is None or not os.path.exists(model_path):
            raise ClassifierUnavailableError(f"Model not found: {model_path}")
        try:
            if model_path.endswith(".ptl"):
                from torch.jit.mobile import _load_for_lite_interpreter
                module = _load_for_lite_interpreter(model_path, map_location=device)
            else:
                module = torch.jit.load(model_path, map_location=device)
                module.eval()
        except Exception as e:
            raise ClassifierUnavailableError(f"Error reading model {model_path}: {e}") from e
        logging.info(f"Loaded classifier from {model_path} on {device}")
        return TorchScriptClassifier(module, device)

    def __call__(self, input_tensor: torch.Tensor) -> torch.Tensor:
        """Forward pass of the classifier.

        Args:
            input_tensor (torch.Tensor): The feature tensor. Shape == (1, slots, slot_width)

        Returns:
            torch.Tensor: The raw class scores, moved to the cpu.
        """
        try:
            with torch.no_grad():
                output = self.module(input_tensor.to(self.device))
        except Exception as e:
            raise ClassifierUnavailableError(f"Error during model inference: {e}") from e
        if not isinstance(output, torch.Tensor):
            raise ClassifierUnavailableError(f"Model returned {type(output).__name__} instead of a tensor")
        return output.cpu()
