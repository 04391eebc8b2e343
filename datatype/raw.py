import logging
from typing import Any, List, Optional

import numpy as np

from datatype.errors import MissingRequiredField
from datatype.sens import normalize_sens
from datatype.types import RawRecord
from datatype.versions import Version, VersionLike, check_dispatch, resolve_version

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("time", "trial", "label")
INFO_OPTIONS = ("yes", "no", "ifmakessense")


def estimate_fsample(time: List[Any]) -> Optional[float]:
    """Sampling rate from the first trial whose time axis has two or more samples."""
    for t in time:
        t = np.asarray(t, dtype=float).ravel()
        if t.size >= 2:
            return float(1.0 / np.mean(np.diff(t)))
    return None


def _trial_lengths(data: RawRecord) -> np.ndarray:
    return np.array([np.asarray(t).size for t in data["time"]], dtype=int)


def _time_as_vectors(data: RawRecord) -> None:
    time = []
    for t in data["time"]:
        if np.ndim(t) != 1:
            t = np.asarray(t).ravel()
        time.append(t)
    data["time"] = time


def _ensure_fsample(data: RawRecord) -> None:
    if "fsample" in data:
        return
    fsample = estimate_fsample(data["time"])
    if fsample is None:
        logger.warning("Cannot estimate fsample: no trial has two or more samples")
        return
    data["fsample"] = fsample


def _raw_2011v2(data: RawRecord) -> RawRecord:
    # offset is obsolete and fsample deprecated: drop the former, leave the latter alone
    data.pop("offset", None)
    _time_as_vectors(data)
    return data


def _raw_2011v1(data: RawRecord) -> RawRecord:
    data.pop("offset", None)
    _time_as_vectors(data)
    _ensure_fsample(data)
    return data


def _time_to_offset(t: Any, fsample: float) -> int:
    t = np.asarray(t).ravel()
    if t.size == 0:
        return 0
    return int(round(float(t[0]) * fsample))


def _raw_2003(data: RawRecord) -> RawRecord:
    _ensure_fsample(data)
    if "offset" not in data and "fsample" in data:
        if any(np.size(t) == 0 for t in data["time"]):
            logger.warning("Trials without samples get offset 0")
        data["offset"] = [_time_to_offset(t, data["fsample"]) for t in data["time"]]
    return data


_DISPATCH = check_dispatch({
    Version.V2011V2: _raw_2011v2,
    Version.V2011V1: _raw_2011v1,
    Version.V2003: _raw_2003,
}, "raw")


def _rows_match_trials(data: RawRecord, field: str) -> bool:
    value = np.asarray(data[field])
    return value.ndim >= 1 and value.shape[0] == len(data["trial"])


def _apply_sampleinfo(data: RawRecord, option: str) -> None:
    if option == "no":
        data.pop("sampleinfo", None)
    elif option == "yes" and "sampleinfo" not in data:
        logger.warning("Reconstructing sampleinfo by assuming that the trials are consecutive "
                       "segments of a continuous recording")
        lengths = _trial_lengths(data)
        end = np.cumsum(lengths)
        begin = end - lengths + 1
        data["sampleinfo"] = np.column_stack([begin, end])
    elif option == "ifmakessense" and "sampleinfo" in data and not _rows_match_trials(data, "sampleinfo"):
        logger.warning("Removing inconsistent sampleinfo")
        data.pop("sampleinfo")


def _apply_trialinfo(data: RawRecord, option: str) -> None:
    if option == "no":
        data.pop("trialinfo", None)
    elif option == "yes" and "trialinfo" not in data:
        logger.warning("trialinfo is requested but absent and cannot be reconstructed")
    elif option == "ifmakessense" and "trialinfo" in data and not _rows_match_trials(data, "trialinfo"):
        logger.warning("Removing inconsistent trialinfo")
        data.pop("trialinfo")


def normalize_raw(data: RawRecord,
                  version: VersionLike = "latest",
                  hassampleinfo: str = "ifmakessense",
                  hastrialinfo: str = "ifmakessense") -> RawRecord:
    """Bring raw time-series data to the layout of the given schema version.

    The input is not modified; a new dict is returned. Sensor descriptions
    (grad/elec) are converted along with the record.
    """
    resolved = resolve_version(version, "raw")
    for name, option in (("hassampleinfo", hassampleinfo), ("hastrialinfo", hastrialinfo)):
        if option not in INFO_OPTIONS:
            raise ValueError(f"{name} must be one of {INFO_OPTIONS}, got {option!r}")
    for field in REQUIRED_FIELDS:
        if field not in data:
            raise MissingRequiredField(field, "raw")

    data = dict(data)
    if "trialdef" in data:
        trialdef = data.pop("trialdef")
        data.setdefault("sampleinfo", trialdef)
    for sens_field in ("grad", "elec"):
        if sens_field in data:
            data[sens_field] = normalize_sens(data[sens_field], resolved)

    logger.debug(f"Normalizing raw data with {len(data['trial'])} trials to {resolved.value}")
    data = _DISPATCH[resolved](data)

    _apply_sampleinfo(data, hassampleinfo)
    _apply_trialinfo(data, hastrialinfo)
    return data
