from enum import Enum
from typing import Callable, Dict, Union

from datatype.errors import UnsupportedVersion


class Version(Enum):
    """Historical schema versions, newest first"""
    V2011V2 = "2011v2"
    V2011V1 = "2011v1"
    V2003 = "2003"


LATEST = Version.V2011V2
LATEST_TAG = "latest"

VersionLike = Union[str, Version]


def resolve_version(version: VersionLike, datatype: str) -> Version:
    """Turn a version tag (or "latest") into a Version member."""
    if isinstance(version, Version):
        return version
    if version == LATEST_TAG:
        return LATEST
    try:
        return Version(version)
    except ValueError:
        raise UnsupportedVersion(version, datatype) from None


def check_dispatch(table: Dict[Version, Callable], datatype: str) -> Dict[Version, Callable]:
    """Fail at import time when a dispatch table does not cover every version."""
    missing = [v.value for v in Version if v not in table]
    if missing:
        raise RuntimeError(f"{datatype} normalizer has no handler for version(s) {missing}")
    return table
