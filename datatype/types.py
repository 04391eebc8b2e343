from typing import Any, List, TypedDict

import numpy as np


class SensorDescription(TypedDict, total=False):
    label: List[str]              # Channel labels (e.g., MLC11, Fp1)
    chanpos: np.ndarray           # Nchan x 3 channel positions (2011v1 and later)
    chanori: np.ndarray           # Nchan x 3 channel orientations
    coilpos: np.ndarray           # Ncoil x 3 gradiometer coil positions
    coilori: np.ndarray           # Ncoil x 3 gradiometer coil orientations
    elecpos: np.ndarray           # Nelec x 3 electrode positions
    tra: np.ndarray               # Nchan x Ncoil coil-to-channel weights
    pnt: np.ndarray               # Coil/electrode positions (2003)
    ori: np.ndarray               # Coil orientations (2003)


class _RawRequired(TypedDict):
    time: List[np.ndarray]        # Per-trial time vectors in seconds
    trial: List[np.ndarray]       # Per-trial matrices [channels][samples]
    label: List[str]              # Channel (or component) names


class RawRecord(_RawRequired, total=False):
    sampleinfo: np.ndarray        # Ntrial x 2 begin/end sample, 1-based inclusive
    trialinfo: np.ndarray         # Ntrial x N trial annotations
    grad: SensorDescription
    elec: SensorDescription
    hdr: dict
    cfg: dict
    fsample: float                # Deprecated since 2011v2
    offset: List[int]             # Obsoleted since 2011v1
    trialdef: np.ndarray          # Pre-2011 name of sampleinfo


class _CompRequired(RawRecord):
    topo: Any                     # Mixing matrix [channels][components]
    topolabel: List[str]          # Original channel names


class CompRecord(_CompRequired, total=False):
    unmixing: np.ndarray          # Unmixing matrix [components][channels] (2011v2)
