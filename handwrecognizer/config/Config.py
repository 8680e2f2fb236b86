import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from dotenv import load_dotenv

from handwrecognizer.config.codebooks import Codebook, get_codebook


class DecodeMode(Enum):
    PER_SLOT = "per-slot"
    SINGLE_CHARACTER = "single-character"


@dataclass
class Config:
    slots: int = 25 # Number of stroke blocks / output characters
    slot_width: int = 29 # Number of features per slot
    num_classes: int = 41
    codebook: str = "basic41" # Built-in codebook name or explicit glyph table
    decode_mode: DecodeMode = DecodeMode.PER_SLOT
    pen_up_flag: float = 1.0
    epsilon: float = 1e-9
    model_path: Optional[str] = None
    device: str = "cpu"
    canvas_width: float = 1.0
    canvas_height: float = 1.0

    @property
    def input_size(self) -> int:
        return self.slots * self.slot_width

    @property
    def input_shape(self) -> Tuple[int, int, int]:
        return (1, self.slots, self.slot_width)

    @property
    def output_size(self) -> int:
        # The single-character variant reads the same buffer size as one global distribution
        return self.slots * self.num_classes

    def get_codebook(self) -> Codebook:
        return get_codebook(self.codebook)

    def validate(self) -> "Config":
        """Checks the sizes and the codebook coverage.

        Returns:
            Config: self, to allow chaining.
        """
        for name in ["slots", "slot_width", "num_classes"]:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if not isinstance(self.decode_mode, DecodeMode):
            self.decode_mode = DecodeMode(self.decode_mode)
        codebook = self.get_codebook()
        if not codebook.is_total(self.num_classes):
            logging.warning(f"Codebook {codebook.name} covers {len(codebook)} glyphs but the classifier has {self.num_classes} classes, missing indices decode to '{codebook.sentinel}'")
        return self

    @staticmethod
    def legacy_single_character() -> "Config":
        """The 81-class variant that reads the whole output as one distribution."""
        return Config(num_classes=81, codebook="ascii81", decode_mode=DecodeMode.SINGLE_CHARACTER)

    @staticmethod
    def from_env(dotenv_path: Optional[str] = None) -> "Config":
        """Creates a config from HANDWRECOGNIZER_* environment variables. A .env file is loaded first if it exists.

        Args:
            dotenv_path (Optional[str]): Path of the .env file. Defaults to searching from the working directory.

        Returns:
            Config: The config.
        """
        load_dotenv(dotenv_path)
        defaults = Config()
        config = Config(
            slots=int(os.getenv("HANDWRECOGNIZER_SLOTS", defaults.slots)),
            slot_width=int(os.getenv("HANDWRECOGNIZER_SLOT_WIDTH", defaults.slot_width)),
            num_classes=int(os.getenv("HANDWRECOGNIZER_NUM_CLASSES", defaults.num_classes)),
            codebook=os.getenv("HANDWRECOGNIZER_CODEBOOK", defaults.codebook),
            decode_mode=DecodeMode(os.getenv("HANDWRECOGNIZER_DECODE_MODE", defaults.decode_mode.value)),
            pen_up_flag=float(os.getenv("HANDWRECOGNIZER_PEN_UP_FLAG", defaults.pen_up_flag)),
            epsilon=float(os.getenv("HANDWRECOGNIZER_EPSILON", defaults.epsilon)),
            model_path=os.getenv("HANDWRECOGNIZER_MODEL_PATH", defaults.model_path),
            device=os.getenv("HANDWRECOGNIZER_DEVICE", defaults.device),
            canvas_width=float(os.getenv("HANDWRECOGNIZER_CANVAS_WIDTH", defaults.canvas_width)),
            canvas_height=float(os.getenv("HANDWRECOGNIZER_CANVAS_HEIGHT", defaults.canvas_height)),
        )
        return config.validate()
