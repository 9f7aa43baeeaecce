import json

import pytest

from jordan_simplex import (INITIAL_STATE, apply_jordan_exchange, load_state, save_state, set_linear_program,
                            step_back, step_forward)
from jordan_simplex.storage import state_from_dict, state_to_dict


@pytest.fixture
def pivoted_state(small_lp):
    state = set_linear_program(INITIAL_STATE, small_lp)
    return apply_jordan_exchange(state, 1, 1)


def test_document_layout(pivoted_state):
    data = state_to_dict(pivoted_state)

    assert set(data) == {"lp", "history", "currentStep", "status", "error"}
    assert data["lp"] == {
        "sense": "max",
        "p": [6.0, 5.0],
        "A": [[1.0, 1.0]],
        "b": [4.0],
        "originalOperators": ["<="],
    }
    assert "pivotRow" not in data["history"][0]
    assert data["history"][1]["pivotRow"] == 1
    assert data["history"][1]["pivotCol"] == 1
    assert data["history"][1]["stepNumber"] == 1
    assert data["currentStep"] == 1
    assert data["status"] == "ready"
    assert data["error"] is None


def test_save_and_load(tmp_path, pivoted_state):
    path = tmp_path / "state.json"

    assert save_state(pivoted_state, path)
    loaded = load_state(path)

    assert loaded == pivoted_state


def test_load_missing_file(tmp_path):
    assert load_state(tmp_path / "missing.json") == INITIAL_STATE


def test_load_invalid_json(tmp_path, caplog):
    path = tmp_path / "state.json"
    path.write_text("{not json")

    assert load_state(path) == INITIAL_STATE
    assert "Failed to load state" in caplog.text


def test_load_falls_back_field_by_field(tmp_path, pivoted_state):
    data = state_to_dict(pivoted_state)
    data["history"][1]["lp"]["A"] = [[1.0, 2.0, 3.0]]
    data["status"] = "bogus"
    del data["currentStep"]
    path = tmp_path / "state.json"
    path.write_text(json.dumps(data))

    loaded = load_state(path)

    assert loaded.lp == pivoted_state.lp
    assert len(loaded.history) == 1
    assert loaded.history[0].lp == pivoted_state.lp
    assert loaded.history[0].step_number == 0
    assert loaded.current_step == 0
    assert loaded.status == "idle"


def test_pivot_after_discarded_history_keeps_initial_entry(pivoted_state):
    data = state_to_dict(pivoted_state)
    data["history"][1]["lp"]["A"] = [[1.0, 2.0, 3.0]]
    data["currentStep"] = 0

    resumed = state_from_dict(data)
    after = apply_jordan_exchange(resumed, 1, 1)

    assert after.status == "ready"
    assert len(after.history) == 2
    assert after.history[0].pivot_row is None
    assert after.history[0].pivot_col is None
    assert after.history[1].step_number == 1
    assert (after.history[1].pivot_row, after.history[1].pivot_col) == (1, 1)
    assert after.current_step == 1


@pytest.mark.parametrize("saved_step", [5, 2, -1])
def test_out_of_range_step_falls_back(pivoted_state, saved_step, caplog):
    data = state_to_dict(pivoted_state)
    data["currentStep"] = saved_step

    loaded = state_from_dict(data)

    assert len(loaded.history) == 2
    assert loaded.current_step == 0
    assert "Discarding saved step" in caplog.text
    assert step_forward(loaded).current_step == 1
    assert step_back(step_forward(loaded)).current_step == 0


def test_malformed_lp_falls_back_to_none():
    state = state_from_dict({"lp": {"sense": "max"}, "status": "error", "error": "boom"})

    assert state.lp is None
    assert state.status == "error"
    assert state.error == "boom"


def test_non_mapping_document():
    assert state_from_dict([1, 2, 3]) == INITIAL_STATE


def test_save_failure_is_logged_not_raised(tmp_path, pivoted_state, caplog):
    target = tmp_path / "is_a_directory"
    target.mkdir()

    assert save_state(pivoted_state, target) is False
    assert "Failed to save state" in caplog.text
