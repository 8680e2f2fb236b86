import torch

from handwrecognizer.__main__ import main, parse_args
from handwrecognizer.dataset.Drawing import Drawing
from handwrecognizer.dataset.loaders.JsonLoader import save_drawing_json


class ZeroClassifier(torch.nn.Module):
    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.zeros([x.shape[0], x.shape[1], 41])


def test_recognizes_json_drawings(tmp_path, capsys):
    model_path = str(tmp_path / "classifier.pt")
    torch.jit.script(ZeroClassifier()).save(model_path)
    drawing_path = str(tmp_path / "drawing.json")
    save_drawing_json(Drawing.from_points([[(0, 0, 0), (1, 0, 10), (1, 1, 20)]]), drawing_path)
    empty_path = str(tmp_path / "empty.json")
    save_drawing_json(Drawing([]), empty_path)

    assert main(["--model", model_path, drawing_path, empty_path]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"{drawing_path}\tsuccess\t{' ' * 25}", f"{empty_path}\tempty\t"]


def test_missing_model_fails(tmp_path, capsys):
    drawing_path = str(tmp_path / "drawing.json")
    save_drawing_json(Drawing.from_points([[(0, 0, 0), (1, 1, 10)]]), drawing_path)
    assert main(["--model", str(tmp_path / "missing.pt"), drawing_path]) == 1
    assert "classifier_unavailable" in capsys.readouterr().out


def test_unloadable_file_does_not_stop_the_run(tmp_path, capsys):
    model_path = str(tmp_path / "classifier.pt")
    torch.jit.script(ZeroClassifier()).save(model_path)
    bad_path = tmp_path / "bad.json"
    bad_path.write_text("[[[0, 0, 10], [1, 1, 0]]]")
    broken_path = tmp_path / "broken.json"
    broken_path.write_text("[[[0, 0")
    good_path = str(tmp_path / "good.json")
    save_drawing_json(Drawing.from_points([[(0, 0, 0), (1, 0, 10), (1, 1, 20)]]), good_path)

    assert main(["--model", model_path, str(bad_path), str(broken_path), good_path]) == 1
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"{bad_path}\tencode_failure\t",
        f"{broken_path}\tencode_failure\t",
        f"{good_path}\tsuccess\t{' ' * 25}",
    ]


def test_canvas_size_is_read_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HANDWRECOGNIZER_CANVAS_WIDTH", "1080")
    monkeypatch.setenv("HANDWRECOGNIZER_CANVAS_HEIGHT", "1920")
    args = parse_args([str(tmp_path / "drawing.json")])
    assert args.config.canvas_width == 1080.0
    assert args.config.canvas_height == 1920.0
