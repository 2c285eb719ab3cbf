import logging
from typing import Any, Type, TypeVar

from forum.api.constants import (
    COMMENTS_PATH,
    LOGIN_PATH,
    ME_PATH,
    MY_FAVORITES_PATH,
    MY_POSTS_PATH,
    POST_FAVORITE_PATH,
    POST_LIKE_PATH,
    POST_PATH,
    POSTS_PATH,
    REGISTER_PATH,
    SEARCH_PARAM,
    USER_FAVORITES_PATH,
    USER_LIKES_PATH,
)
from forum.api.exceptions import (
    ForumApiError,
    ForumAuthError,
    ForumConnectionError,
    ForumError,
    ForumResponseError,
)
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
from forum.utils import from_dict, parse_json

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ForumService:
    """
    포럼 REST API 호출 서비스
    모든 호출은 재시도/타임아웃/캐시 없이 단 한 번의 요청-응답으로 끝납니다.
    """

    def __init__(
        self,
        session: HttpSession,
        base_url: str,
        access_token: str = "",
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token

    def _get_headers(self, auth: bool) -> dict[str, str]:
        """
        API 요청에 필요한 헤더를 생성합니다.

        Args:
            auth: Authorization 헤더 포함 여부

        Returns:
            dict[str, str]: API 요청 헤더 딕셔너리

        Raises:
            ForumAuthError: 인증이 필요한데 토큰이 설정되지 않은 경우
        """
        headers = {
            "accept": "application/json",
            "content-type": "application/json",
        }
        if auth:
            if not self.access_token:
                raise ForumAuthError("토큰이 설정되지 않았습니다.")
            headers["authorization"] = f"Bearer {self.access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        auth: bool = True,
    ) -> Any:
        """
        API 요청을 실행하고 JSON 응답 본문을 반환합니다.

        Args:
            method: HTTP 메서드
            path: base_url 기준 경로
            json: 요청 본문
            params: 쿼리 스트링 파라미터
            auth: Bearer 토큰 사용 여부

        Returns:
            파싱된 JSON 본문, 본문이 비어 있으면 None

        Raises:
            ForumAuthError: 토큰 없이 인증 요청을 보내려 한 경우
            ForumApiError: 서버가 2xx 이외의 상태 코드를 반환한 경우
            ForumResponseError: 응답 본문이 JSON 이 아닌 경우
            ForumConnectionError: 네트워크/전송 오류
        """
        headers = self._get_headers(auth)
        url = f"{self.base_url}{path}"
        try:
            response = await self.session.request(
                method, url, json=json, params=params, headers=headers
            )
            res_http_status = response.status
            text = await response.text()
        except Exception as e:
            # 전송 계층 예외는 ForumConnectionError로 래핑하여 전파
            raise ForumConnectionError(
                f"API 요청 중 예외 발생: {str(e)}"
            ) from e

        if not 200 <= res_http_status < 300:
            body = parse_json(text)
            message = body.get("message") if isinstance(body, dict) else None
            logger.debug(
                "%s %s failed with %s: %s", method, path, res_http_status, text
            )
            raise ForumApiError(res_http_status, message or text)

        if not text or not text.strip():
            return None

        sentinel = object()
        data = parse_json(text, default=sentinel)
        if data is sentinel:
            raise ForumResponseError("JSON 형식이 아닌 응답입니다.", text)
        return data

    @staticmethod
    def _parse(cls: Type[T], data: Any) -> T:
        try:
            return from_dict(cls, data)
        except TypeError as e:
            raise ForumResponseError(
                f"{cls.__name__} 응답 형식이 올바르지 않습니다: {e}", data
            ) from e

    @classmethod
    def _parse_list(cls, item_cls: Type[T], data: Any) -> list[T]:
        if not isinstance(data, list):
            raise ForumResponseError(
                f"{item_cls.__name__} 목록 응답이 필요합니다.", data
            )
        return [cls._parse(item_cls, item) for item in data]

    # ------------------------------------------------------------------ #
    # 인증
    # ------------------------------------------------------------------ #
    async def login(self, identifier: str, password: str) -> LoginResult:
        """
        아이디(또는 이메일)와 비밀번호로 로그인합니다.

        Args:
            identifier: 사용자 이름 또는 이메일
            password: 비밀번호

        Returns:
            LoginResult: 발급된 토큰과 사용자 정보

        Raises:
            ForumApiError: 인증 실패 등 서버 오류
            ForumResponseError: 토큰이 없는 응답
        """
        data = await self._request(
            "POST",
            LOGIN_PATH,
            json={"identifier": identifier, "password": password},
            auth=False,
        )
        result = self._parse(LoginResult, data)
        if not result.token:
            raise ForumResponseError("로그인 응답에 토큰이 없습니다.", data)
        return result

    async def register(self, username: str, email: str, password: str) -> None:
        """새 계정을 등록합니다."""
        await self._request(
            "POST",
            REGISTER_PATH,
            json={"username": username, "email": email, "password": password},
            auth=False,
        )

    # ------------------------------------------------------------------ #
    # 내 정보
    # ------------------------------------------------------------------ #
    async def get_me(self) -> User:
        data = await self._request("GET", ME_PATH)
        return self._parse(User, data)

    async def update_me(self, payload: dict[str, Any]) -> str:
        """
        내 정보를 부분 수정합니다.

        Args:
            payload: 변경된 필드만 담은 딕셔너리 (old_password/new_password 포함 가능)

        Returns:
            str: 서버가 반환한 안내 메시지
        """
        data = await self._request("PUT", ME_PATH, json=payload)
        if isinstance(data, dict):
            return str(data.get("message") or "")
        return ""

    async def delete_me(self) -> None:
        await self._request("DELETE", ME_PATH)

    async def get_my_posts(self) -> list[Post]:
        data = await self._request("GET", MY_POSTS_PATH)
        return self._parse_list(Post, data)

    async def get_my_favorites(self) -> list[Post]:
        data = await self._request("GET", MY_FAVORITES_PATH)
        return self._parse_list(Post, data)

    async def get_user_likes(self, user_id: int) -> list[PostRelation]:
        data = await self._request(
            "GET", USER_LIKES_PATH.format(user_id=user_id)
        )
        return self._parse_list(PostRelation, data)

    async def get_user_favorites(self, user_id: int) -> list[PostRelation]:
        data = await self._request(
            "GET", USER_FAVORITES_PATH.format(user_id=user_id)
        )
        return self._parse_list(PostRelation, data)

    # ------------------------------------------------------------------ #
    # 게시글
    # ------------------------------------------------------------------ #
    async def get_posts(self, query: str = "") -> list[Post]:
        """
        게시글 목록을 조회합니다. 검색어는 그대로 서버에 전달되며 필터링은 서버가 수행합니다.

        Args:
            query: 제목/내용 검색어 (기본값: "")

        Returns:
            list[Post]: 게시글 목록
        """
        data = await self._request(
            "GET", POSTS_PATH, params={SEARCH_PARAM: query}, auth=False
        )
        return self._parse_list(Post, data)

    async def create_post(
        self, title: str, content: str, image_url: str | None = None
    ) -> Post:
        payload: dict[str, Any] = {"title": title, "content": content}
        if image_url:
            payload["image_url"] = image_url
        data = await self._request("POST", POSTS_PATH, json=payload)
        return self._parse(Post, data)

    async def get_post(self, post_id: int) -> Post:
        data = await self._request(
            "GET", POST_PATH.format(post_id=post_id), auth=False
        )
        return self._parse(Post, data)

    async def toggle_like(self, post_id: int) -> LikeResult:
        data = await self._request(
            "POST", POST_LIKE_PATH.format(post_id=post_id), json={}
        )
        return self._parse(LikeResult, data)

    async def toggle_favorite(self, post_id: int) -> FavoriteResult:
        data = await self._request(
            "POST", POST_FAVORITE_PATH.format(post_id=post_id), json={}
        )
        return self._parse(FavoriteResult, data)

    # ------------------------------------------------------------------ #
    # 댓글
    # ------------------------------------------------------------------ #
    async def get_comments(self, post_id: int) -> list[Comment]:
        """댓글 목록을 서버가 반환한 순서 그대로 조회합니다."""
        data = await self._request(
            "GET", COMMENTS_PATH.format(post_id=post_id), auth=False
        )
        return self._parse_list(Comment, data)

    async def create_comment(self, post_id: int, content: str) -> Comment:
        data = await self._request(
            "POST",
            COMMENTS_PATH.format(post_id=post_id),
            json={"content": content},
        )
        return self._parse(Comment, data)
