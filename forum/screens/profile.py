from enum import Enum

from forum.api.schemas import Post, User
from forum.constants import (
    EDIT_PROFILE_SCREEN,
    MSG_PROFILE_LOAD_FAILED,
    MSG_TOKEN_NOT_FOUND,
    POST_DETAIL_SCREEN,
    PREVIEW_LENGTH,
)
from forum.screens.base import BaseScreen, ScreenState, ViewState


class ProfileTab(Enum):
    MY_POSTS = "my_posts"
    FAVORITES = "favorites"


def content_preview(post: Post, length: int = PREVIEW_LENGTH) -> str:
    return f"{(post.content or '')[:length]}..."


class ProfileScreen(BaseScreen):
    """내 프로필 화면 (내 게시글 / 즐겨찾기 탭)"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = ScreenState()
        self.user: User | None = None
        self.my_posts: list[Post] = []
        self.favorite_posts: list[Post] = []
        self.active_tab = ProfileTab.MY_POSTS

    @property
    def visible_posts(self) -> list[Post]:
        if self.active_tab is ProfileTab.FAVORITES:
            return self.favorite_posts
        return self.my_posts

    def select_tab(self, tab: ProfileTab) -> None:
        self.active_tab = tab

    async def fetch_profile(self) -> bool:
        """내 정보, 내 게시글, 즐겨찾기 게시글을 순서대로 조회"""
        if not await self._require_token(MSG_TOKEN_NOT_FOUND):
            return False
        if not self._begin(self.state, ViewState.LOADING):
            return False

        with self.state.settling(MSG_PROFILE_LOAD_FAILED):
            try:
                self.user = await self.client.get_me()
                self.my_posts = await self.client.get_my_posts()
                self.favorite_posts = await self.client.get_my_favorites()
            except Exception as e:
                message = await self._handle_error(e, MSG_PROFILE_LOAD_FAILED)
                self.state.fail(message)
                return False
            self.state.succeed()
        return True

    async def on_focus(self) -> bool:
        """화면이 포커스를 얻을 때마다 다시 조회"""
        return await self.fetch_profile()

    def open_post(self, post_id: int) -> None:
        self.navigator.navigate(POST_DETAIL_SCREEN, {"post_id": post_id})

    def edit_profile(self) -> None:
        if self.user is None:
            return
        self.navigator.navigate(EDIT_PROFILE_SCREEN, {"user": self.user})
