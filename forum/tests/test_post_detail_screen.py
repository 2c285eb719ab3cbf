import pytest

from forum.api.exceptions import ForumApiError
from forum.api.schemas import Comment, Post
from forum.auth.session import AuthState
from forum.constants import (
    MSG_COMMENT_EMPTY,
    MSG_COMMENT_LOGIN_REQUIRED,
    MSG_POST_LOAD_FAILED,
    TITLE_AUTH_ERROR,
    TITLE_ERROR,
)
from forum.screens.base import ViewState
from forum.screens.post_detail import PostDetailScreen


class TestPostDetailScreen:
    @pytest.fixture
    def comments(self):
        return [
            Comment(id=9, post_id=1, content="newest", username="bob"),
            Comment(id=4, post_id=1, content="older", username="carol"),
        ]

    @pytest.fixture
    def screen(self, screen_deps, client, comments):
        client.get_post.return_value = Post(id=1, title="Cats", content="meow")
        client.get_comments.return_value = comments
        return PostDetailScreen(1, *screen_deps)

    @pytest.mark.asyncio
    async def test_fetch_post_detail(self, screen, client, comments):
        assert await screen.fetch_post_detail() is True

        client.get_post.assert_awaited_once_with(1)
        client.get_comments.assert_awaited_once_with(1)
        assert screen.post.title == "Cats"
        # 서버 순서 그대로
        assert [comment.id for comment in screen.comments] == [9, 4]
        assert screen.state.view is ViewState.SUCCESS

    @pytest.mark.asyncio
    async def test_fetch_failure_goes_back(
        self, screen, client, navigator, notifier
    ):
        client.get_post.side_effect = ForumApiError(404, "Post não encontrado")

        assert await screen.fetch_post_detail() is False

        notifier.alert.assert_called_once_with(TITLE_ERROR, MSG_POST_LOAD_FAILED)
        navigator.go_back.assert_called_once()
        assert screen.state.view is ViewState.ERROR

    @pytest.mark.asyncio
    async def test_whitespace_comment_is_rejected(
        self, screen, client, notifier
    ):
        assert await screen.create_comment("   \n\t") is None

        notifier.alert.assert_called_once_with(TITLE_ERROR, MSG_COMMENT_EMPTY)
        client.create_comment.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_comment_success(self, screen, client):
        created = Comment(id=10, post_id=1, content="nice")
        client.create_comment.return_value = created

        assert await screen.create_comment("nice") == created

        client.create_comment.assert_awaited_once_with(1, "nice")
        assert screen.new_comment_content == ""
        client.get_post.assert_awaited_once_with(1)
        client.get_comments.assert_awaited_once_with(1)
        assert screen.comment_state.view is ViewState.SUCCESS

    @pytest.mark.asyncio
    async def test_create_comment_requires_token(
        self, auth_session, client, navigator, notifier
    ):
        screen = PostDetailScreen(1, auth_session, client, navigator, notifier)

        assert await screen.create_comment("nice") is None

        notifier.alert.assert_called_once_with(
            TITLE_AUTH_ERROR, MSG_COMMENT_LOGIN_REQUIRED
        )
        client.create_comment.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_comment_unauthorized(
        self, screen, client, notifier, signed_in_session
    ):
        client.create_comment.side_effect = ForumApiError(401, "Token inválido")

        assert await screen.create_comment("nice") is None

        notifier.alert.assert_called_once_with(TITLE_ERROR, "Token inválido")
        assert signed_in_session.state is AuthState.SIGNED_OUT
        # 실패 시 입력 내용 유지
        assert screen.new_comment_content == "nice"
