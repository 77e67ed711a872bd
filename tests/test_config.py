import json

import pytest

from mandelcore.config import default_config, load_config, normalise_config, view_from_config
from mandelcore.errors import InvalidDimension, InvalidIterationBound, InvalidZoom


def test_load_config_defaults_without_path():
    cfg = load_config(None)
    assert cfg == default_config()
    assert cfg["zoom"] == 0.5
    assert cfg["max_iterations"] == 1000


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "view.json"
    path.write_text(json.dumps({"width": 64, "height": 48, "center": [-0.75, 0.1], "zoom": 2}), encoding="utf-8")
    cfg = normalise_config(load_config(str(path)))
    assert cfg["width"] == 64
    assert cfg["center"] == [-0.75, 0.1]
    assert cfg["zoom"] == 2.0
    assert cfg["max_iterations"] == 1000
    assert cfg["workers"] is None


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "view.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_normalise_requires_fields():
    with pytest.raises(ValueError, match="center"):
        normalise_config({"width": 4, "height": 4})


@pytest.mark.parametrize("override,error", [
    ({"width": 0}, InvalidDimension),
    ({"height": -3}, InvalidDimension),
    ({"max_iterations": 0}, InvalidIterationBound),
    ({"zoom": 0}, InvalidZoom),
    ({"center": [1.0]}, ValueError),
    ({"workers": 0}, ValueError),
    ({"band_height": 0}, ValueError),
])
def test_normalise_rejects_invalid_values(override, error):
    cfg = dict(default_config(), **override)
    with pytest.raises(error):
        normalise_config(cfg)


def test_view_from_config():
    cfg = dict(default_config(), width=10, height=5, center=[0.0, 0.0], zoom=1.0, max_iterations=30, workers=1)
    v = view_from_config(cfg)
    assert (v.width, v.height) == (10, 5)
    assert v.max_iterations == 30
    assert v.workers == 1
    assert v.bounds == (-1.0, -0.5, 1.0, 0.5)
