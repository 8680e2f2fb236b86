class RecognitionError(Exception):
    """Base class of all structural failures of a recognition request."""


class EncodeError(RecognitionError):
    """A drawing could not be turned into a feature vector (e.g. a stroke without points)."""


class SizeMismatchError(RecognitionError):
    """The classifier output does not have the size the decoder was configured for."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Unexpected classifier output size: {actual}, expected: {expected}")
        self.expected = expected
        self.actual = actual


class ClassifierUnavailableError(RecognitionError):
    """The classifier could not be loaded or did not produce an output."""
