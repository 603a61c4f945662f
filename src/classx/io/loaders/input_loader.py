from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from classx.io.loaders.errors import LoaderError
from classx.utils.logging import log_calls

logger = logging.getLogger(__name__)


class InputFileSpec(BaseModel):
    """Construction input stored in a YAML (or JSON) file.

    Expected format:
    target: package.module:ClassName   # optional
    values:
      host: localhost
      port: 8080
    """

    target: Optional[str] = None
    values: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}


def _read_yaml(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@log_calls()
def load_input(path: str) -> InputFileSpec:
    """Read and validate an input file; every failure is wrapped in LoaderError."""
    if not os.path.exists(path):
        raise LoaderError(path, "Input file not found")
    try:
        data = _read_yaml(path)
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Input file is not valid YAML", cause=exc) from exc
    if data is None:
        data = {}
    try:
        spec = InputFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid input definition", cause=exc) from exc
    logger.debug("Loaded %d value(s) from %s", len(spec.values), path)
    return spec
