import pytest

from forum.screens.base import ScreenState, ViewState


class TestScreenState:
    def test_begin_refuses_reentry(self):
        state = ScreenState()

        assert state.begin(ViewState.SUBMITTING) is True
        assert state.begin(ViewState.SUBMITTING) is False
        assert state.is_busy

    def test_begin_requires_busy_view(self):
        with pytest.raises(ValueError):
            ScreenState().begin(ViewState.SUCCESS)

    def test_settling_fails_on_exception(self):
        state = ScreenState()
        state.begin(ViewState.LOADING)

        with pytest.raises(OSError):
            with state.settling("불러오기 실패"):
                raise OSError("disk full")

        assert state.view is ViewState.ERROR
        assert state.error == "불러오기 실패"
        assert state.begin(ViewState.LOADING) is True

    def test_settling_keeps_final_state(self):
        state = ScreenState()
        state.begin(ViewState.SUBMITTING)

        with state.settling("실패"):
            state.succeed()

        assert state.view is ViewState.SUCCESS
        assert state.error is None
