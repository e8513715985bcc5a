"""Tests for integrations.session — state kept around the engine."""

import pytest

from integrations.fold_engine import InvalidWidthError
from integrations.session import CipherSession


@pytest.fixture
def session():
    return CipherSession()


class TestConfiguration:
    def test_defaults(self, session):
        assert session.text == "HELLOWORLD"
        assert session.width == 5
        assert session.grid.rows == 2
        assert session.ciphertext == ""
        assert session.current_fold == -1

    def test_invalid_width_keeps_prior_state(self, session):
        session.add_fold("vertical")
        with pytest.raises(InvalidWidthError):
            session.set_width(11)
        assert session.width == 5
        assert session.grid.cols == 5
        assert len(session.sequence) == 1

    def test_width_change_resets_folds(self, session):
        session.add_fold("vertical")
        session.run()
        session.set_width(3)
        assert session.grid.cols == 3
        assert session.grid.rows == 4
        assert len(session.sequence) == 0
        assert session.ciphertext == ""

    def test_text_change_resets_folds(self, session):
        session.add_fold("horizontal")
        session.set_text("attack at dawn")
        assert session.text == "attack at dawn"
        assert len(session.sequence) == 0
        assert session.grid.rows == 3

    def test_empty_text_is_valid(self, session):
        session.set_text("!!!")
        session.add_fold("horizontal")
        session.add_fold("vertical")
        assert session.run() == ""

    def test_reset(self, session):
        session.set_text("abc")
        session.set_width(3)
        session.add_fold("vertical")
        session.run()
        session.reset()
        assert session.text == "HELLOWORLD"
        assert session.width == 5
        assert len(session.sequence) == 0
        assert session.trace == []


class TestRunning:
    def test_run_replays_from_initial_grid(self, session):
        session.add_fold("vertical")
        assert session.run() == "LQWRAA"
        assert session.run() == "LQWRAA"
        assert session.grid.cell(0, 4).char == "O"
        assert session.display_grid.cell(0, 4).char == "W"

    def test_degenerate_horizontal_fold(self, session):
        session.add_fold("horizontal")
        assert session.run() == "HELLOWORLD"
        assert session.trace[-1] == ">> ENCRYPTION COMPLETE: HELLOWORLD"

    def test_remove_keeps_last_output(self, session):
        session.add_fold("vertical")
        session.run()
        session.remove_fold(0)
        assert session.ciphertext == "LQWRAA"
        assert session.current_fold == -1
        assert session.run() == "HELLOWORLD"

    def test_remove_missing_fold(self, session):
        with pytest.raises(IndexError):
            session.remove_fold(0)

    def test_steps_follow_progress(self, session):
        session.add_fold("vertical")
        session.add_fold("vertical")
        seen = []
        for step in session.steps():
            seen.append(session.current_fold)
            assert session.display_grid == step.grid
        assert seen == [0, 1]
        assert session.ciphertext == "LVERPX"
        assert len(session.trace) == 5

    def test_abandoned_steps_leave_ciphertext(self, session):
        session.add_fold("vertical")
        session.add_fold("vertical")
        steps = session.steps()
        next(steps)
        assert session.ciphertext == ""
        assert session.current_fold == 0

    @pytest.mark.parametrize("rebuild", [
        lambda s: s.set_text("abcdefghi"),
        lambda s: s.set_width(4),
        lambda s: s.reset(),
    ])
    def test_rebuild_mid_run_stops_writing(self, session, rebuild):
        session.add_fold("vertical")
        session.add_fold("vertical")
        steps = session.steps()
        next(steps)
        rebuild(session)
        assert list(steps) == []
        assert session.ciphertext == ""
        assert session.current_fold == -1
        assert session.display_grid == session.grid
        assert all("LVERPX" not in line for line in session.trace)

    def test_rebuild_after_last_step_drops_ciphertext(self, session):
        session.add_fold("vertical")
        steps = session.steps()
        next(steps)
        session.set_text("abcdefghi")
        assert list(steps) == []
        assert session.ciphertext == ""
        assert session.display_grid == session.grid

    def test_invalid_width_mid_run_keeps_run(self, session):
        session.add_fold("vertical")
        session.add_fold("vertical")
        steps = session.steps()
        next(steps)
        with pytest.raises(InvalidWidthError):
            session.set_width(2)
        assert len(list(steps)) == 1
        assert session.ciphertext == "LVERPX"

    def test_to_dict(self, session):
        session.add_fold("horizontal")
        state = session.to_dict()
        assert state["folds"] == [{"axis": "horizontal", "pivot": 1, "keep": "down"}]
        assert state["grid"]["rows"] == 2
        assert state["grid"]["cells"][0][0] == {"char": "H", "value": 8, "visible": True, "depth": 0}
