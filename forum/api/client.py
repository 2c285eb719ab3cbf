from typing import TYPE_CHECKING, Any, Optional

from forum.api.schemas import (
    Comment,
    FavoriteResult,
    LikeResult,
    LoginResult,
    Post,
    PostRelation,
    User,
)
from forum.protocols import HttpSession


class ForumClient:
    """
    포럼 API 클라이언트 - Facade Pattern with Lazy Initialization Singleton
    Client는 싱글톤으로 관리되며, 화면(Screen) 로직의 진입점 역할
    """

    if TYPE_CHECKING:
        # circular import 때문에 dynamic import
        from forum.api.service import ForumService

        _instance: Optional["ForumClient"] = None
        _service: Optional["ForumService"] = None
    else:
        _instance = None
        _service = None

    _session: HttpSession | None = None
    _base_url: str | None = None
    _access_token: str = ""

    def __init__(
        self, session: HttpSession, base_url: str, access_token: str = ""
    ):
        """
        Private constructor. Use get_client() instead.

        Args:
            session: HTTP 세션 객체
            base_url: 포럼 API 기본 URL
            access_token: 로그인 후 발급된 Bearer 토큰 (로그인 전에는 빈 값)
        """
        self._session = session
        self._base_url = base_url
        self._access_token = access_token

        # Service 도 lazy initialization
        self._service = None

    @classmethod
    def get_client(
        cls,
        session: HttpSession,
        base_url: str = "",
        access_token: str = "",
    ) -> "ForumClient":
        """
        싱글톤 인스턴스를 반환합니다.

        Args:
            session: HTTP 세션 객체 (aiohttp.ClientSession 등)
            base_url: 포럼 API 기본 URL. 첫 호출 시 필수, 이후 선택적
            access_token: Bearer 토큰. 로그인 전에는 생략 가능

        Returns:
            ForumClient: 초기화된 클라이언트 인스턴스

        Raises:
            ValueError: 세션이 없거나 첫 호출 시 base_url 이 없는 경우
        """
        if not session:
            raise ValueError("session은 필수입니다.")

        if cls._instance is None and not base_url:
            raise ValueError("첫 호출 시 base_url은 필수입니다.")

        if cls._instance is None:
            cls._instance = cls(session, base_url, access_token)
        else:
            instance = cls._instance
            instance._session = session
            if base_url:
                instance._base_url = base_url
            if instance._service:
                instance._service.session = session
                instance._service.base_url = instance._base_url.rstrip("/")
            if access_token:
                instance.update_token(access_token)

        return cls._instance

    def update_token(self, access_token: str) -> None:
        """
        현재 인스턴스의 토큰을 업데이트합니다. 로그아웃 시에는 빈 문자열을 전달합니다.

        Args:
            access_token: 새로운 Bearer 토큰

        Returns:
            None
        """
        self._access_token = access_token
        if self._service:
            self._service.access_token = access_token

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def service(self) -> "ForumService":
        """
        ForumService 인스턴스를 반환합니다. (Lazy initialization)

        Returns:
            ForumService: 서비스 인스턴스
        """
        if self._service is None:
            if not self._session or not self._base_url:
                raise ValueError(
                    "서비스를 사용하기 전에 세션과 base_url을 설정해야 합니다."
                )

            from forum.api.service import ForumService

            self._service = ForumService(
                self._session, self._base_url, self._access_token
            )
        return self._service

    async def login(self, identifier: str, password: str) -> LoginResult:
        """
        자격 증명을 토큰으로 교환합니다.

        Args:
            identifier: 사용자 이름 또는 이메일
            password: 비밀번호

        Returns:
            LoginResult: 토큰과 사용자 정보

        Raises:
            ForumError: API 요청 중 오류가 발생한 경우
        """
        return await self.service.login(identifier, password)

    async def register(self, username: str, email: str, password: str) -> None:
        """
        새 계정을 등록합니다.

        Raises:
            ForumError: API 요청 중 오류가 발생한 경우
        """
        await self.service.register(username, email, password)

    async def get_me(self) -> User:
        """
        현재 로그인한 사용자 정보를 조회합니다.

        Returns:
            User: 사용자 정보

        Raises:
            ForumError: API 요청 중 오류가 발생한 경우
        """
        return await self.service.get_me()

    async def update_me(self, payload: dict[str, Any]) -> str:
        """
        내 정보를 부분 수정합니다.

        Args:
            payload: 변경된 필드만 담은 딕셔너리

        Returns:
            str: 서버 안내 메시지

        Raises:
            ForumError: API 요청 중 오류가 발생한 경우
        """
        return await self.service.update_me(payload)

    async def delete_me(self) -> None:
        """
        계정을 삭제합니다. 되돌릴 수 없습니다.

        Raises:
            ForumError: API 요청 중 오류가 발생한 경우
        """
        await self.service.delete_me()

    async def get_my_posts(self) -> list[Post]:
        """내가 작성한 게시글 목록을 조회합니다."""
        return await self.service.get_my_posts()

    async def get_my_favorites(self) -> list[Post]:
        """내가 즐겨찾기한 게시글 목록을 조회합니다."""
        return await self.service.get_my_favorites()

    async def get_user_likes(self, user_id: int) -> list[PostRelation]:
        """사용자의 좋아요 관계 목록을 조회합니다."""
        return await self.service.get_user_likes(user_id)

    async def get_user_favorites(self, user_id: int) -> list[PostRelation]:
        """사용자의 즐겨찾기 관계 목록을 조회합니다."""
        return await self.service.get_user_favorites(user_id)

    async def get_posts(self, query: str = "") -> list[Post]:
        """
        게시글 목록을 조회합니다.

        Args:
            query: 제목/내용 검색어 (기본값: "", 전체 목록)

        Returns:
            list[Post]: 게시글 목록

        Raises:
            ForumError: API 요청 중 오류가 발생한 경우
        """
        return await self.service.get_posts(query)

    async def create_post(
        self, title: str, content: str, image_url: str | None = None
    ) -> Post:
        """
        게시글을 작성합니다.

        Args:
            title: 제목
            content: 내용
            image_url: 첨부 이미지 참조 (선택)

        Returns:
            Post: 생성된 게시글

        Raises:
            ForumError: API 요청 중 오류가 발생한 경우
        """
        return await self.service.create_post(title, content, image_url)

    async def get_post(self, post_id: int) -> Post:
        """게시글 하나를 조회합니다."""
        return await self.service.get_post(post_id)

    async def toggle_like(self, post_id: int) -> LikeResult:
        """
        좋아요를 토글합니다.

        Returns:
            LikeResult: 서버 기준 새 좋아요 상태
        """
        return await self.service.toggle_like(post_id)

    async def toggle_favorite(self, post_id: int) -> FavoriteResult:
        """
        즐겨찾기를 토글합니다.

        Returns:
            FavoriteResult: 서버 기준 새 즐겨찾기 상태와 안내 메시지
        """
        return await self.service.toggle_favorite(post_id)

    async def get_comments(self, post_id: int) -> list[Comment]:
        """댓글 목록을 조회합니다. (서버 순서 유지)"""
        return await self.service.get_comments(post_id)

    async def create_comment(self, post_id: int, content: str) -> Comment:
        """댓글을 작성합니다."""
        return await self.service.create_comment(post_id, content)

    @classmethod
    def reset_client(cls) -> None:
        """
        클라이언트 인스턴스를 재설정합니다.
        주로 테스트나 설정 변경 시 사용됩니다.

        Args:
            None

        Returns:
            None
        """
        cls._instance = None
        cls._session = None
        cls._base_url = None
        cls._access_token = ""
        cls._service = None
