from datatype.comp import UnmixingState, normalize_comp
from datatype.config import NormalizerSettings, load_settings
from datatype.errors import DatatypeError, MissingRequiredField, UnsupportedVersion
from datatype.log import configure_logging
from datatype.raw import normalize_raw
from datatype.sens import normalize_sens
from datatype.versions import LATEST, Version, resolve_version

__all__ = [
    "LATEST",
    "DatatypeError",
    "MissingRequiredField",
    "NormalizerSettings",
    "UnmixingState",
    "UnsupportedVersion",
    "Version",
    "configure_logging",
    "load_settings",
    "normalize_comp",
    "normalize_raw",
    "normalize_sens",
    "resolve_version",
]
