import logging

from forum.api.schemas import Post
from forum.constants import (
    MSG_FAVORITE_FAILED,
    MSG_FAVORITE_LOGIN_REQUIRED,
    MSG_LIKE_FAILED,
    MSG_LIKE_LOGIN_REQUIRED,
    MSG_LOGOUT_CONFIRM,
    MSG_POST_CREATE_FAILED,
    MSG_POST_EMPTY,
    MSG_POST_LOGIN_REQUIRED,
    MSG_POSTS_LOAD_FAILED,
    POST_DETAIL_SCREEN,
    PROFILE_SCREEN,
    TITLE_LOGOUT,
    TITLE_NOTICE,
    TITLE_SUCCESS,
)
from forum.screens.base import BaseScreen, ScreenState, ViewState

logger = logging.getLogger("forum.screens")


class HomeScreen(BaseScreen):
    """피드 화면: 목록/검색, 게시글 작성, 좋아요/즐겨찾기 토글"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = ScreenState()  # 목록 로딩
        self.compose_state = ScreenState()  # 게시글 작성

        self.posts: list[Post] = []
        self.search_term = ""
        self.user_likes: dict[int, bool] = {}
        self.user_favorites: dict[int, bool] = {}

        # 작성 폼
        self.new_post_title = ""
        self.new_post_content = ""
        self.new_post_image: str | None = None

    def find_post(self, post_id: int) -> Post | None:
        return next((post for post in self.posts if post.id == post_id), None)

    def is_liked(self, post_id: int) -> bool:
        return self.user_likes.get(post_id, False)

    def is_favorited(self, post_id: int) -> bool:
        return self.user_favorites.get(post_id, False)

    async def _load_relations(self) -> tuple[dict[int, bool], dict[int, bool]]:
        """토글 버튼 초기 상태를 위한 현재 사용자의 좋아요/즐겨찾기 관계 조회"""
        likes: dict[int, bool] = {}
        favorites: dict[int, bool] = {}
        user_id = self.session.user_id
        if user_id is None or not self.session.token:
            return likes, favorites

        try:
            for relation in await self.client.get_user_likes(user_id):
                likes[relation.post_id] = True
            for relation in await self.client.get_user_favorites(user_id):
                favorites[relation.post_id] = True
        except Exception as e:
            # 목록 자체는 보여줄 수 있으므로 알림 없이 기록만 남김
            logger.error(
                "Failed to load like/favorite relations for user %s: %s",
                user_id,
                e,
            )
        return likes, favorites

    async def fetch_posts(self, query: str | None = None) -> bool:
        """
        게시글 목록과 현재 사용자의 좋아요/즐겨찾기 상태를 조회합니다.

        Args:
            query: 검색어. None 이면 현재 search_term 을 유지

        Returns:
            bool: 목록 조회 성공 여부
        """
        if query is not None:
            self.search_term = query
        if not self._begin(self.state, ViewState.LOADING):
            return False

        with self.state.settling(MSG_POSTS_LOAD_FAILED):
            try:
                posts = await self.client.get_posts(self.search_term)
            except Exception as e:
                message = await self._handle_error(
                    e, MSG_POSTS_LOAD_FAILED, use_server_message=False
                )
                self.state.fail(message)
                return False

            self.user_likes, self.user_favorites = await self._load_relations()
            self.posts = posts
            self.state.succeed()
        return True

    async def search(self, term: str) -> bool:
        return await self.fetch_posts(term)

    def pick_image(self, image_ref: str | None) -> None:
        self.new_post_image = image_ref

    def _reset_compose_form(self) -> None:
        self.new_post_title = ""
        self.new_post_content = ""
        self.new_post_image = None

    async def create_post(
        self,
        title: str | None = None,
        content: str | None = None,
        image_ref: str | None = None,
    ) -> Post | None:
        """
        게시글을 작성합니다. 제목과 내용이 모두 비어 있으면 요청하지 않습니다.
        인자가 None 이면 작성 폼에 입력된 값을 사용합니다.

        Returns:
            Post | None: 생성된 게시글, 실패/거부 시 None
        """
        if title is not None:
            self.new_post_title = title
        if content is not None:
            self.new_post_content = content
        if image_ref is not None:
            self.new_post_image = image_ref

        if not self.new_post_title.strip() and not self.new_post_content.strip():
            self.notifier.alert(TITLE_NOTICE, MSG_POST_EMPTY)
            return None
        if not await self._require_token(MSG_POST_LOGIN_REQUIRED):
            return None
        if not self._begin(self.compose_state, ViewState.SUBMITTING):
            return None

        with self.compose_state.settling(MSG_POST_CREATE_FAILED):
            try:
                post = await self.client.create_post(
                    self.new_post_title, self.new_post_content, self.new_post_image
                )
            except Exception as e:
                message = await self._handle_error(e, MSG_POST_CREATE_FAILED)
                self.compose_state.fail(message)
                return None
            self.compose_state.succeed()

        logger.info("Created post %s", post.id)
        self._reset_compose_form()
        await self.fetch_posts()
        return post

    def _apply_like(
        self, post_id: int, liked: bool, previous: bool, base_count: int
    ) -> None:
        """좋아요 상태와 표시 카운트를 토글 이전 기준값(base_count)에서 다시 계산"""
        self.user_likes[post_id] = liked
        post = self.find_post(post_id)
        if post is None:
            return
        if liked == previous:
            post.likes_count = base_count
        elif liked:
            post.likes_count = base_count + 1
        else:
            post.likes_count = max(0, base_count - 1)

    async def toggle_like(self, post_id: int) -> bool | None:
        """
        좋아요를 토글합니다.
        로컬 상태를 먼저 반영하고, 서버 응답으로 맞추며, 실패 시 되돌립니다.

        Returns:
            bool | None: 서버 기준 새 좋아요 상태, 실패 시 None
        """
        if not await self._require_token(MSG_LIKE_LOGIN_REQUIRED):
            return None

        previous = self.is_liked(post_id)
        post = self.find_post(post_id)
        base_count = post.likes_count if post else 0
        self._apply_like(post_id, not previous, previous, base_count)

        try:
            result = await self.client.toggle_like(post_id)
        except Exception as e:
            self._apply_like(post_id, previous, previous, base_count)
            await self._handle_error(e, MSG_LIKE_FAILED)
            return None

        self._apply_like(post_id, result.liked, previous, base_count)
        return result.liked

    async def toggle_favorite(self, post_id: int) -> bool | None:
        """
        즐겨찾기를 토글합니다. 카운트는 조정하지 않고 상태값만 반영합니다.

        Returns:
            bool | None: 서버 기준 새 즐겨찾기 상태, 실패 시 None
        """
        if not await self._require_token(MSG_FAVORITE_LOGIN_REQUIRED):
            return None

        previous = self.is_favorited(post_id)
        self.user_favorites[post_id] = not previous

        try:
            result = await self.client.toggle_favorite(post_id)
        except Exception as e:
            self.user_favorites[post_id] = previous
            await self._handle_error(e, MSG_FAVORITE_FAILED)
            return None

        self.user_favorites[post_id] = result.favorited
        if result.message:
            self.notifier.alert(TITLE_SUCCESS, result.message)
        return result.favorited

    async def logout(self) -> bool:
        """확인 후 로그아웃"""
        if not await self.notifier.confirm(TITLE_LOGOUT, MSG_LOGOUT_CONFIRM):
            return False
        logger.info("User requested sign out from the feed")
        await self.session.sign_out()
        return True

    def open_post(self, post_id: int) -> None:
        self.navigator.navigate(POST_DETAIL_SCREEN, {"post_id": post_id})

    def open_profile(self) -> None:
        self.navigator.navigate(PROFILE_SCREEN)
