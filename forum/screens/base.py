import logging
from collections.abc import Collection, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

import sentry_sdk

from forum.api.client import ForumClient
from forum.api.exceptions import (
    UNAUTHORIZED_STATUSES,
    ForumApiError,
    ForumAuthError,
)
from forum.auth.session import AuthSession
from forum.constants import TITLE_AUTH_ERROR, TITLE_ERROR
from forum.protocols import Navigator, Notifier

logger = logging.getLogger("forum.screens")


class ViewState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


BUSY_STATES = frozenset({ViewState.LOADING, ViewState.SUBMITTING})


@dataclass
class ScreenState:
    """
    화면 단위 상태
    idle → loading/submitting → success/error 로만 전이합니다.
    """

    view: ViewState = ViewState.IDLE
    error: str | None = None

    @property
    def is_busy(self) -> bool:
        return self.view in BUSY_STATES

    def begin(self, view: ViewState) -> bool:
        """진행 상태로 전이, 이미 진행 중이면 False"""
        if view not in BUSY_STATES:
            raise ValueError(f"{view} 는 진행 상태가 아닙니다.")
        if self.is_busy:
            return False
        self.view = view
        self.error = None
        return True

    def succeed(self) -> None:
        self.view = ViewState.SUCCESS
        self.error = None

    def fail(self, message: str) -> None:
        self.view = ViewState.ERROR
        self.error = message

    @contextmanager
    def settling(self, message: str) -> Iterator[None]:
        """블록을 벗어날 때까지 진행 상태가 남아 있으면 실패로 전이"""
        try:
            yield
        finally:
            if self.is_busy:
                self.fail(message)


class BaseScreen:
    """모든 화면 컨트롤러의 공통 기반 (세션, API 클라이언트, 네비게이션, 알림 주입)"""

    def __init__(
        self,
        session: AuthSession,
        client: ForumClient,
        navigator: Navigator,
        notifier: Notifier,
    ):
        self.session = session
        self.client = client
        self.navigator = navigator
        self.notifier = notifier

    def _begin(self, state: ScreenState, view: ViewState) -> bool:
        if not state.begin(view):
            logger.warning(
                "%s is busy (%s), ignoring request",
                self.__class__.__name__,
                state.view.value,
            )
            return False
        return True

    async def _require_token(self, message: str) -> str | None:
        """토큰이 없으면 알림 후 로그아웃, 있으면 토큰 반환"""
        if self.session.token:
            return self.session.token
        self.notifier.alert(TITLE_AUTH_ERROR, message)
        await self.session.sign_out()
        return None

    async def _handle_error(
        self,
        error: Exception,
        fallback: str,
        title: str = TITLE_ERROR,
        sign_out_statuses: Collection[int] = UNAUTHORIZED_STATUSES,
        use_server_message: bool = True,
    ) -> str:
        """
        화면 공통 에러 처리

        Args:
            error: 발생한 예외
            fallback: 서버 메시지가 없을 때 보여줄 문구
            title: 알림 제목
            sign_out_statuses: 강제 로그아웃을 유발하는 HTTP 상태 코드
            use_server_message: 서버 메시지를 우선 사용할지 여부

        Returns:
            str: 사용자에게 보여준 메시지
        """
        message = fallback
        if isinstance(error, ForumApiError):
            logger.error(
                "%s request failed (status: %s): %s",
                self.__class__.__name__,
                error.status,
                error.message,
            )
            if use_server_message and error.message:
                message = error.message
        else:
            logger.error(
                "%s request failed: %s", self.__class__.__name__, error
            )
            sentry_sdk.capture_exception(error)

        self.notifier.alert(title, message)

        forced_sign_out = isinstance(error, ForumAuthError) or (
            isinstance(error, ForumApiError)
            and error.status in sign_out_statuses
        )
        if forced_sign_out:
            logger.warning(
                "Forcing sign out after authorization failure in %s",
                self.__class__.__name__,
            )
            await self.session.sign_out()
        return message
