# src/roadsearch/io/config.py
from pathlib import Path

from roadsearch.config.models import EngineModel


def load_config(path: str | Path) -> EngineModel:
    """Read and validate a JSON engine config; raises pydantic.ValidationError."""
    return EngineModel.model_validate_json(Path(path).read_text(encoding="utf-8"))
