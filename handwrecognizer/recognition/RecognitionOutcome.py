from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RecognitionStatus(Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    SIZE_MISMATCH = "size_mismatch"
    CLASSIFIER_UNAVAILABLE = "classifier_unavailable"
    ENCODE_FAILURE = "encode_failure"


@dataclass(frozen=True)
class RecognitionOutcome:
    status: RecognitionStatus
    text: Optional[str] = None # Decoded text, the sentinel for SIZE_MISMATCH, None when nothing was decoded
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == RecognitionStatus.SUCCESS
