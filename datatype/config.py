import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_ENV_VAR = "DATATYPE_CONFIG"
DEFAULT_CONFIG_PATH = "datatype_config.yaml"

logger = logging.getLogger(__name__)


class NormalizerSettings(BaseModel):
    pinv_rcond: float = Field(1e-15, gt=0)   # cutoff for small singular values in pinv
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(path: Optional[Union[str, Path]] = None) -> NormalizerSettings:
    """Load normalizer settings from YAML.

    Looks at ``path``, then ``$DATATYPE_CONFIG``, then ``datatype_config.yaml``
    in the working directory. A missing file gives the defaults.
    """
    config_path = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    if not config_path.is_file():
        logger.debug(f"No settings file at {config_path}, using defaults")
        return NormalizerSettings()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    logger.debug(f"Loaded settings from {config_path}: {raw}")
    return NormalizerSettings(**raw)
