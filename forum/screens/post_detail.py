from forum.api.schemas import Comment, Post
from forum.constants import (
    MSG_COMMENT_EMPTY,
    MSG_COMMENT_FAILED,
    MSG_COMMENT_LOGIN_REQUIRED,
    MSG_POST_LOAD_FAILED,
    TITLE_ERROR,
)
from forum.screens.base import BaseScreen, ScreenState, ViewState


class PostDetailScreen(BaseScreen):
    """게시글 상세 + 댓글 화면"""

    def __init__(self, post_id: int, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.post_id = post_id
        self.state = ScreenState()
        self.comment_state = ScreenState()

        self.post: Post | None = None
        self.comments: list[Comment] = []
        self.new_comment_content = ""

    async def fetch_post_detail(self) -> bool:
        """게시글과 댓글 목록(서버 순서 그대로)을 조회, 실패 시 이전 화면으로 돌아감"""
        if not self._begin(self.state, ViewState.LOADING):
            return False
        with self.state.settling(MSG_POST_LOAD_FAILED):
            try:
                self.post = await self.client.get_post(self.post_id)
                self.comments = await self.client.get_comments(self.post_id)
            except Exception as e:
                message = await self._handle_error(
                    e, MSG_POST_LOAD_FAILED, use_server_message=False
                )
                self.state.fail(message)
                self.navigator.go_back()
                return False
            self.state.succeed()
        return True

    async def create_comment(self, content: str | None = None) -> Comment | None:
        """
        댓글을 작성합니다. 공백만 있는 내용은 요청하지 않습니다.
        성공하면 입력창을 비우고 게시글과 댓글을 다시 조회합니다.
        """
        if content is not None:
            self.new_comment_content = content

        if not self.new_comment_content.strip():
            self.notifier.alert(TITLE_ERROR, MSG_COMMENT_EMPTY)
            return None
        if not await self._require_token(MSG_COMMENT_LOGIN_REQUIRED):
            return None
        if not self._begin(self.comment_state, ViewState.SUBMITTING):
            return None

        with self.comment_state.settling(MSG_COMMENT_FAILED):
            try:
                comment = await self.client.create_comment(
                    self.post_id, self.new_comment_content
                )
            except Exception as e:
                message = await self._handle_error(e, MSG_COMMENT_FAILED)
                self.comment_state.fail(message)
                return None
            self.comment_state.succeed()

        self.new_comment_content = ""
        await self.fetch_post_detail()
        return comment
