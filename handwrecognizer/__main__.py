
import argparse
import logging
import os
import sys
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional, Tuple

import torch
from handwrecognizer.classifier.TorchScriptClassifier import TorchScriptClassifier
from handwrecognizer.config.Config import Config, DecodeMode
from handwrecognizer.dataset.Drawing import Drawing
from handwrecognizer.dataset.loaders.IamLoader import load_drawings_from_dir, parse_xml_file
from handwrecognizer.dataset.loaders.JsonLoader import load_drawing_json
from handwrecognizer.errors import ClassifierUnavailableError
from handwrecognizer.recognition.RecognitionOutcome import RecognitionOutcome, RecognitionStatus
from handwrecognizer.recognition.Recognizer import Recognizer


def parse_args(argv: List[str]) -> argparse.Namespace:
    defaults = Config.from_env()
    parser = argparse.ArgumentParser(prog="handwrecognizer", description="Recognize text in pen stroke drawings")
    parser.add_argument("inputs", nargs="+", help="Drawing json files, IAM lineStrokes xml files or directories of xml files")
    parser.add_argument("--model", default=defaults.model_path, help="TorchScript classifier (.pt or .ptl)")
    parser.add_argument("--decode-mode", default=defaults.decode_mode.value, choices=[mode.value for mode in DecodeMode])
    parser.add_argument("--codebook", default=defaults.codebook, help="ascii81, basic41 or the glyphs in class order")
    parser.add_argument("--num-classes", type=int, default=defaults.num_classes)
    parser.add_argument("--slots", type=int, default=defaults.slots)
    parser.add_argument("--slot-width", type=int, default=defaults.slot_width)
    parser.add_argument("--device", default=defaults.device)
    parser.add_argument("--dump-features", action="store_true", help="Print the encoded feature vector of every drawing")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    args.config = Config(
        slots=args.slots,
        slot_width=args.slot_width,
        num_classes=args.num_classes,
        codebook=args.codebook,
        decode_mode=DecodeMode(args.decode_mode),
        pen_up_flag=defaults.pen_up_flag,
        epsilon=defaults.epsilon,
        model_path=args.model,
        device=args.device,
        canvas_width=defaults.canvas_width,
        canvas_height=defaults.canvas_height,
    )
    return args


def load_inputs(inputs: List[str]) -> Iterator[Tuple[str, Optional[Drawing]]]:
    """Loads the inputs one at a time. A file that cannot be loaded yields None instead of a drawing."""
    for path in inputs:
        if os.path.isdir(path):
            dataset = load_drawings_from_dir(path)
            for name, drawing in zip(dataset.names, dataset.drawings):
                yield name, drawing
            continue
        try:
            drawing = parse_xml_file(path) if path.endswith(".xml") else load_drawing_json(path)
        except (ValueError, ET.ParseError, OSError) as e:
            logging.warning(f"Could not load {path}: {e}")
            yield path, None
            continue
        yield path, drawing


def main(argv: List[str]) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        classifier = TorchScriptClassifier.load(args.config.model_path, args.config.device)
    except ClassifierUnavailableError as e:
        logging.error(str(e))
        classifier = None
    recognizer = Recognizer(args.config, classifier)

    failed = 0
    for name, drawing in load_inputs(args.inputs):
        if drawing is None:
            failed += 1
            print(f"{name}\t{RecognitionStatus.ENCODE_FAILURE.value}\t")
            continue
        if args.dump_features:
            torch.set_printoptions(precision=4, linewidth=160, threshold=1_000_000)
            print(name, recognizer.encode(drawing).reshape(args.config.slots, args.config.slot_width))
        outcome: RecognitionOutcome = recognizer.recognize(drawing)
        if outcome.status not in (RecognitionStatus.SUCCESS, RecognitionStatus.EMPTY):
            failed += 1
        print(f"{name}\t{outcome.status.value}\t{outcome.text if outcome.text is not None else ''}")
    return 1 if failed > 0 else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
