import json
from typing import Any, Dict, Optional

from mandelcore.errors import check_dimension, check_iterations, check_zoom
from mandelcore.grid import DEFAULT_BAND_HEIGHT
from mandelcore.view import DEFAULT_MAX_ITERATIONS, DEFAULT_ZOOM_LEVEL, FractalView

def default_config() -> Dict[str, Any]:
    return {
        "width": 800,
        "height": 600,
        "center": [-0.5, 0.0],
        "zoom": DEFAULT_ZOOM_LEVEL,
        "max_iterations": DEFAULT_MAX_ITERATIONS,
        "workers": None,
        "band_height": DEFAULT_BAND_HEIGHT,
    }

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return default_config()
    with open(config_path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ValueError("Config JSON must be an object.")
    return cfg

def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    required = ["width", "height", "center"]
    for r in required:
        if r not in cfg:
            raise ValueError(f"Missing config field: {r}")

    center = cfg["center"]
    if not (isinstance(center, (list, tuple)) and len(center) == 2):
        raise ValueError("center must be [re, im].")

    workers = cfg.get("workers")
    if workers is not None:
        workers = int(workers)
        if workers < 1:
            raise ValueError("workers must be >= 1")
    band_height = int(cfg.get("band_height", DEFAULT_BAND_HEIGHT))
    if band_height < 1:
        raise ValueError("band_height must be >= 1")

    out = dict(cfg)
    out["width"] = check_dimension("width", cfg["width"])
    out["height"] = check_dimension("height", cfg["height"])
    out["center"] = [float(center[0]), float(center[1])]
    out["zoom"] = check_zoom(cfg.get("zoom", DEFAULT_ZOOM_LEVEL))
    out["max_iterations"] = check_iterations(cfg.get("max_iterations", DEFAULT_MAX_ITERATIONS))
    out["workers"] = workers
    out["band_height"] = band_height
    return out

def view_from_config(cfg: Dict[str, Any]) -> FractalView:
    cfg = normalise_config(cfg)
    re, im = cfg["center"]
    return FractalView(
        cfg["width"],
        cfg["height"],
        complex(re, im),
        zoom=cfg["zoom"],
        max_iterations=cfg["max_iterations"],
        workers=cfg["workers"],
        band_height=cfg["band_height"],
    )
