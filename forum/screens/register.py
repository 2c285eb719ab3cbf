from forum.constants import (
    LOGIN_SCREEN,
    MSG_REGISTER_FAILED,
    MSG_REGISTER_SUCCESS,
    TITLE_REGISTER_ERROR,
    TITLE_SUCCESS,
)
from forum.screens.base import BaseScreen, ScreenState, ViewState


class RegisterScreen(BaseScreen):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = ScreenState()

    async def register(self, username: str, email: str, password: str) -> bool:
        """계정 생성 후 로그인 화면으로 이동"""
        if not self._begin(self.state, ViewState.SUBMITTING):
            return False
        with self.state.settling(MSG_REGISTER_FAILED):
            try:
                await self.client.register(username, email, password)
            except Exception as e:
                message = await self._handle_error(
                    e,
                    MSG_REGISTER_FAILED,
                    title=TITLE_REGISTER_ERROR,
                    sign_out_statuses=(),
                )
                self.state.fail(message)
                return False
            self.state.succeed()

        self.notifier.alert(TITLE_SUCCESS, MSG_REGISTER_SUCCESS)
        self.navigator.navigate(LOGIN_SCREEN)
        return True

    def go_to_login(self) -> None:
        self.navigator.navigate(LOGIN_SCREEN)
