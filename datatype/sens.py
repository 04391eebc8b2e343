import logging

import numpy as np

from datatype.types import SensorDescription
from datatype.versions import Version, VersionLike, check_dispatch, resolve_version

logger = logging.getLogger(__name__)

GRAD_MARKERS = ("ori", "coilori", "coilpos")


def is_grad(sens: SensorDescription) -> bool:
    """Gradiometer arrays carry coil orientations, electrode sets do not."""
    return any(key in sens for key in GRAD_MARKERS)


def _position_field(sens: SensorDescription) -> str:
    return "coilpos" if is_grad(sens) else "elecpos"


def _derive_chanpos(sens: SensorDescription) -> None:
    pos_field = _position_field(sens)
    if pos_field not in sens or "label" not in sens:
        return

    positions = np.asarray(sens[pos_field], dtype=float)
    nchan = len(sens["label"])

    if positions.shape[0] == nchan:
        rows = np.arange(nchan)
    elif "tra" in sens and np.shape(sens["tra"]) == (nchan, positions.shape[0]):
        # each channel sits at the coil it weights most
        rows = np.argmax(np.abs(np.asarray(sens["tra"], dtype=float)), axis=1)
    else:
        logger.warning(f"Cannot derive chanpos for {nchan} channels from {positions.shape[0]} positions")
        return

    sens["chanpos"] = positions[rows].copy()
    if "coilori" in sens and "chanori" not in sens:
        sens["chanori"] = np.asarray(sens["coilori"], dtype=float)[rows].copy()


def _sens_2011(sens: SensorDescription) -> SensorDescription:
    pos_field = _position_field(sens)
    if "pnt" in sens:
        pnt = sens.pop("pnt")
        sens.setdefault(pos_field, pnt)
    if "ori" in sens:
        ori = sens.pop("ori")
        sens.setdefault("coilori", ori)
    if "chanpos" not in sens:
        _derive_chanpos(sens)
    return sens


def _sens_2003(sens: SensorDescription) -> SensorDescription:
    pos_field = _position_field(sens)
    if pos_field in sens:
        pos = sens.pop(pos_field)
        sens.setdefault("pnt", pos)
    if "coilori" in sens:
        ori = sens.pop("coilori")
        sens.setdefault("ori", ori)
    sens.pop("chanpos", None)
    sens.pop("chanori", None)
    return sens


_DISPATCH = check_dispatch({
    Version.V2011V2: _sens_2011,
    Version.V2011V1: _sens_2011,   # the sensor description changed in 2011v1
    Version.V2003: _sens_2003,
}, "sens")


def normalize_sens(sens: SensorDescription, version: VersionLike = "latest") -> SensorDescription:
    """Return a copy of a grad/elec description in the given version's layout."""
    resolved = resolve_version(version, "sens")
    logger.debug(f"Normalizing {'grad' if is_grad(sens) else 'elec'} to {resolved.value}")
    return _DISPATCH[resolved](dict(sens))
