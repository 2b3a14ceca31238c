"""Tests for the status overlay label text."""

import pytest

pytest.importorskip("PySide6.QtWidgets")

from autoshake.core.model import State  # noqa: E402
from autoshake.ui.widgets import StatusIndicator  # noqa: E402


class TestLabelFor:
    """Tests for StatusIndicator.label_for()."""

    @pytest.mark.parametrize("state", list(State))
    def test_off_ignores_state(self, state: State) -> None:
        assert StatusIndicator.label_for(False, state) == "AUTO OFF"

    @pytest.mark.parametrize("state", list(State))
    def test_on_shows_state(self, state: State) -> None:
        assert StatusIndicator.label_for(True, state) == f"AUTO ON · {state.name}"

    def test_every_state_has_a_color(self) -> None:
        assert set(StatusIndicator.STATE_COLORS) == set(State)
