"""
Normalization of component data.

Component data is channel-level time-series data decomposed into components
(e.g. ICA or PCA). It is raw data with two extra fields, ``topo`` (the mixing
matrix, channels x components) and ``topolabel`` (the original channel names),
and since 2011v2 ``unmixing`` (components x channels).

Revision history:

* 2011v2 (latest): the unmixing matrix is part of the record.
* 2011v1: the description of the sensors changed.
* 2003: initial version.
"""

import logging
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np

from datatype.config import NormalizerSettings
from datatype.errors import MissingRequiredField
from datatype.raw import normalize_raw
from datatype.types import CompRecord
from datatype.versions import Version, VersionLike, check_dispatch, resolve_version

logger = logging.getLogger(__name__)

COMP_FIELDS = ("topo", "topolabel")
DEFAULT_SETTINGS = NormalizerSettings()


class UnmixingState(Enum):
    """What happened to the unmixing matrix during normalization"""
    PRESERVED = "preserved"
    COMPUTED = "computed"
    ABSENT = "absent"


Unmixing = Tuple[UnmixingState, Optional[Any]]


def _unmixing_2011v2(comp: CompRecord, settings: NormalizerSettings) -> Unmixing:
    if "unmixing" in comp:
        return UnmixingState.PRESERVED, comp["unmixing"]
    # best estimate from the mixing matrix
    topo = np.asarray(comp["topo"])
    return UnmixingState.COMPUTED, np.linalg.pinv(topo, rcond=settings.pinv_rcond)


def _unmixing_absent(comp: CompRecord, settings: NormalizerSettings) -> Unmixing:
    # the field did not exist until November 2011
    return UnmixingState.ABSENT, None


_DISPATCH = check_dispatch({
    Version.V2011V2: _unmixing_2011v2,
    Version.V2011V1: _unmixing_absent,
    Version.V2003: _unmixing_absent,
}, "comp")


def normalize_comp(comp: CompRecord,
                   version: VersionLike = "latest",
                   settings: Optional[NormalizerSettings] = None) -> CompRecord:
    """Return ``comp`` converted to the given schema version.

    The fields shared with raw data are handled by :func:`normalize_raw`;
    ``topo`` and ``topolabel`` are passed through untouched. The input dict
    is not modified.

    Raises:
        UnsupportedVersion: ``version`` is not a known schema version.
        MissingRequiredField: ``topo`` or ``topolabel`` (or a field raw data
            requires) is absent.
    """
    resolved = resolve_version(version, "comp")
    for field in COMP_FIELDS:
        if field not in comp:
            raise MissingRequiredField(field, "comp")
    settings = settings or DEFAULT_SETTINGS

    state, unmixing = _DISPATCH[resolved](comp, settings)
    logger.debug(f"comp {resolved.value}: unmixing {state.value}")

    rawdata = {k: v for k, v in comp.items() if k not in COMP_FIELDS and k != "unmixing"}
    rawdata = normalize_raw(rawdata, resolved)

    if state is not UnmixingState.ABSENT:
        rawdata["unmixing"] = unmixing
    rawdata["topo"] = comp["topo"]
    rawdata["topolabel"] = comp["topolabel"]
    return rawdata
