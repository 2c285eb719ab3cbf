import json
import logging
from enum import Enum
from typing import Callable

from forum.api.client import ForumClient
from forum.api.schemas import User
from forum.constants import USER_DATA_KEY, USER_TOKEN_KEY
from forum.protocols import KeyValueStorage
from forum.utils import from_dict, to_dict

logger = logging.getLogger(__name__)


class AuthState(Enum):
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


AuthListener = Callable[[AuthState], None]


class AuthSession:
    """
    전역 인증 세션
    프로세스 시작 시 한 번 생성되며, sign_in/sign_out 으로만 상태가 바뀝니다.
    토큰이 필요한 모든 화면이 이 객체를 주입받아 읽습니다.
    """

    def __init__(
        self, storage: KeyValueStorage, client: ForumClient | None = None
    ):
        self.storage = storage
        self.client = client
        self.state = AuthState.SIGNED_OUT
        self.token: str | None = None
        self.user: User | None = None
        self._listeners: list[AuthListener] = []

    @property
    def is_signed_in(self) -> bool:
        return self.state is AuthState.SIGNED_IN

    @property
    def user_id(self) -> int | None:
        return self.user.id if self.user else None

    def add_listener(self, listener: AuthListener) -> None:
        self._listeners.append(listener)

    def _transition(self, state: AuthState) -> None:
        self.state = state
        for listener in self._listeners:
            listener(state)

    def _apply_token(self, token: str) -> None:
        if self.client is not None:
            self.client.update_token(token)

    async def restore(self) -> AuthState:
        """저장소에 남아 있는 토큰/사용자 정보로 세션을 복원"""
        token = await self.storage.get_item(USER_TOKEN_KEY)
        if not token:
            return self.state

        user = None
        raw_user = await self.storage.get_item(USER_DATA_KEY)
        if raw_user:
            try:
                user = from_dict(User, json.loads(raw_user))
            except (json.JSONDecodeError, TypeError) as e:
                logger.warning("Ignoring corrupt stored user data: %s", e)

        self.token = token
        self.user = user
        self._apply_token(token)
        logger.info("Restored session for user %s", self.user_id)
        self._transition(AuthState.SIGNED_IN)
        return self.state

    async def sign_in(self, token: str, user: User) -> None:
        """토큰과 사용자 정보를 저장하고 로그인 상태로 전환"""
        if not token:
            raise ValueError("token은 필수입니다.")

        await self.storage.set_item(USER_TOKEN_KEY, token)
        await self.storage.set_item(USER_DATA_KEY, json.dumps(to_dict(user)))
        self.token = token
        self.user = user
        self._apply_token(token)
        logger.info("Signed in as %s (id: %s)", user.username, user.id)
        self._transition(AuthState.SIGNED_IN)

    async def sign_out(self) -> None:
        """저장된 토큰/사용자 정보를 지우고 로그아웃 상태로 전환"""
        await self.storage.remove_item(USER_TOKEN_KEY)
        await self.storage.remove_item(USER_DATA_KEY)
        self.token = None
        self.user = None
        self._apply_token("")
        logger.info("Signed out")
        self._transition(AuthState.SIGNED_OUT)
