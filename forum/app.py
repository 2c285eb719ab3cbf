import logging

from forum.api.client import ForumClient
from forum.api.schemas import User
from forum.auth.encryption import TokenEncryption
from forum.auth.session import AuthSession, AuthState
from forum.auth.storage import FileStorage
from forum.config import Settings
from forum.constants import HOME_SCREEN, LOGIN_SCREEN
from forum.protocols import HttpSession, KeyValueStorage, Navigator, Notifier
from forum.screens.edit_profile import EditProfileScreen
from forum.screens.home import HomeScreen
from forum.screens.login import LoginScreen
from forum.screens.post_detail import PostDetailScreen
from forum.screens.profile import ProfileScreen
from forum.screens.register import RegisterScreen

logger = logging.getLogger("forum")


def build_storage(settings: Settings) -> FileStorage:
    encryption = (
        TokenEncryption.from_secret(settings.storage_key)
        if settings.storage_key
        else None
    )
    return FileStorage(settings.session_file, encryption)


class ForumApp:
    """
    프로세스 단위 구성 요소(저장소, 세션, API 클라이언트)를 조립하고 화면을 생성합니다.
    로그인/로그아웃 시 네비게이션 스택을 피드 또는 로그인 화면으로 초기화합니다.
    """

    def __init__(
        self,
        settings: Settings,
        http_session: HttpSession,
        navigator: Navigator,
        notifier: Notifier,
        storage: KeyValueStorage | None = None,
    ):
        self.settings = settings
        self.navigator = navigator
        self.notifier = notifier
        self.client = ForumClient.get_client(
            http_session, settings.api_base_url
        )
        self.session = AuthSession(
            storage if storage is not None else build_storage(settings),
            self.client,
        )
        self.session.add_listener(self._on_auth_change)

    def _on_auth_change(self, state: AuthState) -> None:
        target = HOME_SCREEN if state is AuthState.SIGNED_IN else LOGIN_SCREEN
        logger.debug("Auth state changed to %s, resetting to %s", state, target)
        self.navigator.reset(target)

    async def start(self) -> AuthState:
        """저장된 세션 복원 후 첫 화면으로 이동"""
        state = await self.session.restore()
        if state is AuthState.SIGNED_OUT:
            self.navigator.reset(LOGIN_SCREEN)
        return state

    def _deps(self) -> tuple:
        return (self.session, self.client, self.navigator, self.notifier)

    def login_screen(self) -> LoginScreen:
        return LoginScreen(*self._deps())

    def register_screen(self) -> RegisterScreen:
        return RegisterScreen(*self._deps())

    def home_screen(self) -> HomeScreen:
        return HomeScreen(*self._deps())

    def post_detail_screen(self, post_id: int) -> PostDetailScreen:
        return PostDetailScreen(post_id, *self._deps())

    def profile_screen(self) -> ProfileScreen:
        return ProfileScreen(*self._deps())

    def edit_profile_screen(self, user: User) -> EditProfileScreen:
        return EditProfileScreen(user, *self._deps())
