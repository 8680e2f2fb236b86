import logging
import threading
from typing import Callable, Optional, Sequence, Union

import torch

from handwrecognizer.classifier.TorchScriptClassifier import Classifier
from handwrecognizer.config.Config import Config
from handwrecognizer.dataset.Drawing import Drawing, Point
from handwrecognizer.decoding.text_decoder import decode
from handwrecognizer.encoding.sequence_assembler import generate_input_tensor
from handwrecognizer.errors import ClassifierUnavailableError, EncodeError, SizeMismatchError
from handwrecognizer.recognition.RecognitionOutcome import RecognitionOutcome, RecognitionStatus

logger = logging.getLogger(__name__)

DrawingLike = Union[Drawing, Sequence[Sequence[Point]]]


class Recognizer:
    """Turns drawings into text: encode, classify, decode.

    The recognizer keeps no state between requests. Every failure ends the request and is reported
    as a RecognitionOutcome, nothing is retried.
    """

    def __init__(self, config: Config, classifier: Optional[Classifier]) -> None:
        self.config = config.validate()
        self.classifier = classifier

    def encode(self, drawing: Drawing) -> torch.Tensor:
        """Encodes a drawing into the classifier input.

        Args:
            drawing (Drawing): The drawing.

        Returns:
            torch.Tensor: The input tensor. Shape == (1, slots, slot_width)
        """
        return generate_input_tensor(drawing, self.config)

    def recognize(self, drawing: DrawingLike) -> RecognitionOutcome:
        """Runs one recognition request synchronously.

        Args:
            drawing (DrawingLike): The drawing, or lists of (x, y, t) triples per stroke.

        Returns:
            RecognitionOutcome: The outcome. An empty drawing never reaches the classifier.
        """
        try:
            drawing = _as_drawing(drawing)
        except ValueError as e:
            logger.warning(f"Rejecting drawing: {e}")
            return RecognitionOutcome(RecognitionStatus.ENCODE_FAILURE, message=str(e))

        if drawing.is_empty():
            return RecognitionOutcome(RecognitionStatus.EMPTY, message="No strokes to recognize")

        try:
            input_tensor = self.encode(drawing)
        except EncodeError as e:
            logger.warning(f"Error during preprocessing: {e}")
            return RecognitionOutcome(RecognitionStatus.ENCODE_FAILURE, message=str(e))
        logger.debug(f"Input tensor shape: {tuple(input_tensor.shape)}")

        try:
            output = self._classify(input_tensor)
        except ClassifierUnavailableError as e:
            return RecognitionOutcome(RecognitionStatus.CLASSIFIER_UNAVAILABLE, message=str(e))
        logger.debug(f"Model output shape: {tuple(output.shape)}")

        try:
            text = decode(output, self.config)
        except SizeMismatchError as e:
            logger.warning(str(e))
            return RecognitionOutcome(RecognitionStatus.SIZE_MISMATCH, text=self.config.get_codebook().sentinel, message=str(e))

        logger.info(f"Recognized {len(drawing.strokes)} strokes as {text!r}")
        return RecognitionOutcome(RecognitionStatus.SUCCESS, text=text)

    def _classify(self, input_tensor: torch.Tensor) -> torch.Tensor:
        if self.classifier is None:
            raise ClassifierUnavailableError("No classifier loaded")
        try:
            output = self.classifier(input_tensor)
        except ClassifierUnavailableError:
            logger.exception("Error during model inference")
            raise
        except Exception as e:
            logger.exception("Error during model inference")
            raise ClassifierUnavailableError(str(e)) from e
        if output is None:
            raise ClassifierUnavailableError("Classifier returned no output")
        return torch.as_tensor(output)

    def recognize_in_background(self, drawing: DrawingLike, callback: Callable[[RecognitionOutcome], None]) -> threading.Thread:
        """Runs a recognition request on a daemon thread and passes the outcome to callback.

        The drawing is copied before the thread starts, so the caller may clear or keep mutating its buffer.

        Args:
            drawing (DrawingLike): The drawing.
            callback (Callable[[RecognitionOutcome], None]): Receives the outcome on the worker thread.

        Returns:
            threading.Thread: The started worker thread.
        """
        snapshot: Optional[Drawing] = None
        rejected: Optional[RecognitionOutcome] = None
        try:
            snapshot = Drawing.snapshot(drawing.strokes) if isinstance(drawing, Drawing) else Drawing.from_points(drawing)
        except ValueError as e:
            logger.warning(f"Rejecting drawing: {e}")
            rejected = RecognitionOutcome(RecognitionStatus.ENCODE_FAILURE, message=str(e))

        def run() -> None:
            callback(rejected if snapshot is None else self.recognize(snapshot))

        thread = threading.Thread(target=run, daemon=True)
        thread.start()
        return thread


def _as_drawing(drawing: DrawingLike) -> Drawing:
    if isinstance(drawing, Drawing):
        return drawing
    return Drawing.from_points(drawing)
