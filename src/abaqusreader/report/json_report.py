"""JSON export of parsed meshes and models."""

import json
import dataclasses
from enum import Enum
from pathlib import Path
from typing import Union

from abaqusreader.models import Mesh, Model


def _convert(obj):
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        result = {}
        for f in dataclasses.fields(obj):
            result[f.name] = _convert(getattr(obj, f.name))
        if not isinstance(obj, (Mesh, Model)):
            # tag union members: Elastic, SolidSection, ...
            result["type"] = type(obj).__name__
        return result
    elif isinstance(obj, list):
        return [_convert(item) for item in obj]
    elif isinstance(obj, dict):
        return {str(k): _convert(v) for k, v in obj.items()}
    elif isinstance(obj, set):
        return sorted(obj)
    elif isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, tuple):
        return [_convert(item) for item in obj]
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, float) and obj != obj:  # NaN
        return None
    return obj


def mesh_to_dict(mesh: Mesh) -> dict:
    """Convert a Mesh to a JSON-serializable dictionary."""
    return _convert(mesh)


def model_to_dict(model: Model) -> dict:
    """Convert a Model (mesh included) to a JSON-serializable dictionary."""
    return _convert(model)


def write_json_report(obj: Union[Mesh, Model], filepath: Path):
    """Write a mesh or model as a JSON file."""
    data = model_to_dict(obj) if isinstance(obj, Model) else mesh_to_dict(obj)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
