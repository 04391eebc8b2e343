import logging

import numpy as np
import pytest

from datatype.errors import MissingRequiredField, UnsupportedVersion
from datatype.raw import estimate_fsample, normalize_raw


@pytest.fixture
def raw():
    """Three trials of 4 channels; the second starts 0.1 s before its event."""
    fs = 250.0
    return {
        "time": [np.arange(25) / fs, np.arange(-25, 25) / fs, np.arange(10) / fs],
        "trial": [np.zeros((4, 25)), np.zeros((4, 50)), np.zeros((4, 10))],
        "label": ["Fp1", "Fp2", "Cz", "Oz"],
    }


# ---------------------------------------------------------------------------
# fsample / offset / time
# ---------------------------------------------------------------------------

def test_estimate_fsample(raw):
    assert estimate_fsample(raw["time"]) == pytest.approx(250.0)


def test_estimate_fsample_needs_two_samples():
    assert estimate_fsample([np.array([0.0])]) is None
    assert estimate_fsample([]) is None


def test_estimate_fsample_skips_short_trials():
    time = [np.array([]), np.array([0.5]), np.arange(10) / 100.0]
    assert estimate_fsample(time) == pytest.approx(100.0)


def test_latest_drops_offset_keeps_fsample(raw):
    raw.update(offset=[0, -25, 0], fsample=250.0)
    out = normalize_raw(raw, "latest")
    assert "offset" not in out
    assert out["fsample"] == 250.0


def test_latest_does_not_add_fsample(raw):
    out = normalize_raw(raw, "2011v2")
    assert "fsample" not in out


def test_2011v1_adds_fsample(raw):
    out = normalize_raw(raw, "2011v1")
    assert out["fsample"] == pytest.approx(250.0)


def test_2003_derives_offset(raw):
    out = normalize_raw(raw, "2003")
    assert out["offset"] == [0, -25, 0]


def test_2003_offset_of_empty_trial(raw, caplog):
    raw["time"][0] = np.array([])
    raw["trial"][0] = np.zeros((4, 0))
    with caplog.at_level(logging.WARNING, logger="datatype.raw"):
        out = normalize_raw(raw, "2003")
    assert out["fsample"] == pytest.approx(250.0)
    assert out["offset"] == [0, -25, 0]
    assert "offset 0" in caplog.text


def test_2003_keeps_existing_offset(raw):
    raw["offset"] = [1, 2, 3]
    out = normalize_raw(raw, "2003")
    assert out["offset"] == [1, 2, 3]


def test_2003_without_fsample_estimate(caplog):
    data = {"time": [np.array([0.0])], "trial": [np.zeros((1, 1))], "label": ["Cz"]}
    with caplog.at_level(logging.WARNING, logger="datatype.raw"):
        out = normalize_raw(data, "2003")
    assert "fsample" not in out
    assert "offset" not in out
    assert "Cannot estimate fsample" in caplog.text


def test_column_time_vectors_become_1d(raw):
    raw["time"] = [t.reshape(-1, 1) for t in raw["time"]]
    out = normalize_raw(raw)
    assert all(t.ndim == 1 for t in out["time"])


def test_1d_time_vectors_kept_as_is(raw):
    out = normalize_raw(raw)
    assert all(a is b for a, b in zip(out["time"], raw["time"]))


# ---------------------------------------------------------------------------
# sampleinfo / trialinfo
# ---------------------------------------------------------------------------

def test_trialdef_renamed(raw):
    raw["trialdef"] = np.array([[1, 25], [26, 75], [76, 85]])
    out = normalize_raw(raw)
    assert "trialdef" not in out
    np.testing.assert_array_equal(out["sampleinfo"], raw["trialdef"])


def test_sampleinfo_reconstructed(raw, caplog):
    with caplog.at_level(logging.WARNING, logger="datatype.raw"):
        out = normalize_raw(raw, hassampleinfo="yes")
    np.testing.assert_array_equal(out["sampleinfo"], [[1, 25], [26, 75], [76, 85]])
    assert "consecutive" in caplog.text


def test_sampleinfo_removed_on_request(raw):
    raw["sampleinfo"] = np.array([[1, 25], [26, 75], [76, 85]])
    assert "sampleinfo" not in normalize_raw(raw, hassampleinfo="no")


def test_inconsistent_sampleinfo_dropped(raw):
    raw["sampleinfo"] = np.array([[1, 25]])
    assert "sampleinfo" not in normalize_raw(raw)


def test_consistent_trialinfo_kept(raw):
    raw["trialinfo"] = np.array([[1], [2], [1]])
    out = normalize_raw(raw)
    assert out["trialinfo"] is raw["trialinfo"]


def test_trialinfo_options(raw, caplog):
    raw["trialinfo"] = np.array([[1], [2]])
    assert "trialinfo" not in normalize_raw(raw)
    assert "trialinfo" not in normalize_raw(raw, hastrialinfo="no")

    del raw["trialinfo"]
    with caplog.at_level(logging.WARNING, logger="datatype.raw"):
        out = normalize_raw(raw, hastrialinfo="yes")
    assert "trialinfo" not in out
    assert "cannot be reconstructed" in caplog.text


def test_invalid_info_option(raw):
    with pytest.raises(ValueError, match="hassampleinfo"):
        normalize_raw(raw, hassampleinfo="maybe")


# ---------------------------------------------------------------------------
# Sensors, input handling, failures
# ---------------------------------------------------------------------------

def test_sensors_converted_with_record(raw):
    raw["elec"] = {"label": raw["label"], "pnt": np.eye(4, 3)}
    out = normalize_raw(raw)
    assert "elecpos" in out["elec"]
    assert "pnt" in raw["elec"]


def test_input_not_modified(raw):
    raw.update(offset=[0, -25, 0], trialdef=np.array([[1, 25], [26, 75], [76, 85]]))
    keys = set(raw)
    normalize_raw(raw)
    assert set(raw) == keys


@pytest.mark.parametrize("field", ["time", "trial", "label"])
def test_missing_required_field(raw, field):
    del raw[field]
    with pytest.raises(MissingRequiredField, match=field):
        normalize_raw(raw)


def test_unsupported_version(raw):
    with pytest.raises(UnsupportedVersion, match='"2010" for raw'):
        normalize_raw(raw, "2010")
