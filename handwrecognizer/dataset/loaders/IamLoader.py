import logging
import os
import xml.etree.ElementTree as ET
from tqdm import tqdm
from handwrecognizer.dataset.Dataset import Dataset
from handwrecognizer.dataset.Drawing import Drawing


def parse_xml_file(path: str) -> Drawing:
    """Parses an IAM On-Line lineStrokes xml file and returns its strokes as a drawing.

    Args:
        path (str): The path to the xml file.

    Returns:
        Drawing: The strokes in the xml file, timestamps converted from seconds to milliseconds.
    """
    # open the xml file with ET
    with open(path) as f:
        root = ET.parse(f).getroot()

    # iterate over all sub-elements of the root element that are named 'Stroke'
    strokes = []
    for stroke in root.iter('Stroke'):
        # get all the points in the stroke
        points = []
        for point in stroke.iter('Point'):
            time_ms = int(round(float(point.attrib.get('time', 0.0)) * 1000))
            points.append((float(point.attrib['x']), float(point.attrib['y']), time_ms))
        if len(points) == 0:
            logging.warning(f'Skipping empty stroke in {path}.')
            continue
        strokes.append(points)
    return Drawing.from_points(strokes)


def load_drawings_from_dir(path: str) -> Dataset:
    """Loads every xml file below a directory, e.g. the IAM lineStrokes directory.

    Args:
        path (str): The directory to search.

    Returns:
        Dataset: The drawings, named by their path relative to the directory.
    """
    xml_files = []
    for dirpath, _, filenames in os.walk(path):
        xml_files.extend([os.path.join(dirpath, filename) for filename in sorted(filenames) if filename.endswith('.xml')])

    dataset = Dataset()
    for xml_file in tqdm(sorted(xml_files)):
        try:
            drawing = parse_xml_file(xml_file)
        except (ET.ParseError, ValueError, KeyError) as e:
            tqdm.write(f'Could not parse {xml_file}: {e}')
            continue
        dataset.add(os.path.relpath(xml_file, path), drawing)

    total_strokes = sum([len(drawing.strokes) for drawing in dataset.drawings])
    logging.info(f'Loaded {len(dataset)} drawings with {total_strokes} strokes from {path}.')
    return dataset
