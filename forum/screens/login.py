from forum.constants import (
    MSG_LOGIN_FAILED,
    MSG_LOGIN_SUCCESS,
    REGISTER_SCREEN,
    TITLE_LOGIN_ERROR,
    TITLE_SUCCESS,
)
from forum.screens.base import BaseScreen, ScreenState, ViewState


class LoginScreen(BaseScreen):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = ScreenState()

    async def login(self, identifier: str, password: str) -> bool:
        """
        자격 증명을 토큰으로 교환하고 세션을 로그인 상태로 전환합니다.
        화면 전환은 세션 리스너(ForumApp)가 담당합니다.
        """
        if not self._begin(self.state, ViewState.SUBMITTING):
            return False
        with self.state.settling(MSG_LOGIN_FAILED):
            try:
                result = await self.client.login(identifier, password)
                await self.session.sign_in(result.token, result.user)
            except Exception as e:
                message = await self._handle_error(
                    e,
                    MSG_LOGIN_FAILED,
                    title=TITLE_LOGIN_ERROR,
                    sign_out_statuses=(),
                )
                self.state.fail(message)
                return False
            self.state.succeed()

        self.notifier.alert(TITLE_SUCCESS, MSG_LOGIN_SUCCESS)
        return True

    def go_to_register(self) -> None:
        self.navigator.navigate(REGISTER_SCREEN)
