from unittest.mock import AsyncMock

import aiohttp
import pytest

from forum.api.exceptions import (
    ForumApiError,
    ForumAuthError,
    ForumConnectionError,
    ForumResponseError,
)
from forum.api.schemas import Comment, LoginResult, Post, User
from forum.api.service import ForumService
from forum.tests.conftest import BASE_URL, make_response


class TestForumService:
    @pytest.fixture
    def service(self, http_session):
        return ForumService(http_session, BASE_URL + "/", access_token="t1")

    @pytest.fixture
    def anonymous_service(self, http_session):
        return ForumService(http_session, BASE_URL)

    @pytest.mark.asyncio
    async def test_login_success(self, anonymous_service, http_session):
        """로그인 성공 시 토큰과 사용자 정보 반환, 인증 헤더 없음"""
        http_session.request.return_value = make_response(
            body={"token": "t1", "user": {"id": 1, "username": "alice"}}
        )

        result = await anonymous_service.login("alice", "secret")

        assert result == LoginResult(token="t1", user=User(id=1, username="alice"))
        args, kwargs = http_session.request.call_args
        assert args == ("POST", f"{BASE_URL}/auth/login")
        assert kwargs["json"] == {"identifier": "alice", "password": "secret"}
        assert "authorization" not in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_login_without_token_in_response(
        self, anonymous_service, http_session
    ):
        http_session.request.return_value = make_response(
            body={"token": "", "user": {"id": 1, "username": "alice"}}
        )

        with pytest.raises(ForumResponseError):
            await anonymous_service.login("alice", "secret")

    @pytest.mark.asyncio
    async def test_api_error_uses_server_message(self, service, http_session):
        """4xx 응답은 서버 message 를 담은 ForumApiError"""
        http_session.request.return_value = make_response(
            status=400, body={"message": "Usuário já existe"}
        )

        with pytest.raises(ForumApiError) as exc_info:
            await service.register("alice", "a@example.com", "pw")

        assert exc_info.value.status == 400
        assert exc_info.value.message == "Usuário já existe"
        assert not exc_info.value.is_unauthorized

    @pytest.mark.asyncio
    async def test_api_error_without_json_body(self, service, http_session):
        http_session.request.return_value = make_response(
            status=502, text="Bad Gateway"
        )

        with pytest.raises(ForumApiError) as exc_info:
            await service.get_me()

        assert exc_info.value.status == 502
        assert exc_info.value.message == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_unauthorized_error(self, service, http_session):
        http_session.request.return_value = make_response(
            status=401, body={"message": "Token inválido"}
        )

        with pytest.raises(ForumApiError) as exc_info:
            await service.get_my_posts()

        assert exc_info.value.is_unauthorized

    @pytest.mark.asyncio
    async def test_authenticated_call_sends_bearer(self, service, http_session):
        http_session.request.return_value = make_response(
            body={"id": 1, "username": "alice", "email": "a@example.com"}
        )

        user = await service.get_me()

        assert user.email == "a@example.com"
        _, kwargs = http_session.request.call_args
        assert kwargs["headers"]["authorization"] == "Bearer t1"

    @pytest.mark.asyncio
    async def test_authenticated_call_without_token(
        self, anonymous_service, http_session
    ):
        """토큰이 없으면 요청 전에 실패"""
        with pytest.raises(ForumAuthError):
            await anonymous_service.toggle_like(1)

        http_session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_posts_passes_query_verbatim(self, service, http_session):
        http_session.request.return_value = make_response(
            body=[{"id": 1, "title": "Cats", "content": "meow", "extra": 1}]
        )

        posts = await service.get_posts("cats & dogs")

        assert posts == [Post(id=1, title="Cats", content="meow")]
        args, kwargs = http_session.request.call_args
        assert args == ("GET", f"{BASE_URL}/posts")
        assert kwargs["params"] == {"q": "cats & dogs"}

    @pytest.mark.asyncio
    async def test_get_posts_empty_query(self, service, http_session):
        http_session.request.return_value = make_response(body=[])

        assert await service.get_posts() == []
        _, kwargs = http_session.request.call_args
        assert kwargs["params"] == {"q": ""}

    @pytest.mark.asyncio
    async def test_list_expected_but_object_received(
        self, service, http_session
    ):
        http_session.request.return_value = make_response(body={"posts": []})

        with pytest.raises(ForumResponseError):
            await service.get_my_favorites()

    @pytest.mark.asyncio
    async def test_malformed_json(self, service, http_session):
        http_session.request.return_value = make_response(text="<html>")

        with pytest.raises(ForumResponseError):
            await service.get_post(1)

    @pytest.mark.asyncio
    async def test_empty_body_on_delete(self, service, http_session):
        http_session.request.return_value = make_response(status=204)

        assert await service.delete_me() is None
        args, _ = http_session.request.call_args
        assert args == ("DELETE", f"{BASE_URL}/users/me")

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, service, http_session):
        http_session.request = AsyncMock(
            side_effect=aiohttp.ClientConnectionError("refused")
        )

        with pytest.raises(ForumConnectionError):
            await service.get_comments(1)

    @pytest.mark.asyncio
    async def test_body_read_timeout_is_wrapped(self, service, http_session):
        response = make_response()
        response.text = AsyncMock(side_effect=TimeoutError())
        http_session.request.return_value = response

        with pytest.raises(ForumConnectionError) as exc_info:
            await service.get_post(1)

        assert isinstance(exc_info.value.__cause__, TimeoutError)

    @pytest.mark.asyncio
    async def test_update_me_returns_message(self, service, http_session):
        http_session.request.return_value = make_response(
            body={"message": "Perfil atualizado"}
        )

        message = await service.update_me({"email": "new@example.com"})

        assert message == "Perfil atualizado"
        args, kwargs = http_session.request.call_args
        assert args == ("PUT", f"{BASE_URL}/users/me")
        assert kwargs["json"] == {"email": "new@example.com"}

    @pytest.mark.asyncio
    async def test_create_post_with_image(self, service, http_session):
        http_session.request.return_value = make_response(
            body={"id": 9, "title": "t", "content": "c", "image_url": "/img.png"}
        )

        post = await service.create_post("t", "c", "file:///img.png")

        assert post.id == 9
        _, kwargs = http_session.request.call_args
        assert kwargs["json"] == {
            "title": "t",
            "content": "c",
            "image_url": "file:///img.png",
        }

    @pytest.mark.asyncio
    async def test_create_post_without_image(self, service, http_session):
        http_session.request.return_value = make_response(body={"id": 9})

        await service.create_post("t", "")

        _, kwargs = http_session.request.call_args
        assert "image_url" not in kwargs["json"]

    @pytest.mark.asyncio
    async def test_toggle_endpoints(self, service, http_session):
        http_session.request.return_value = make_response(body={"liked": True})
        assert (await service.toggle_like(3)).liked is True
        args, _ = http_session.request.call_args
        assert args == ("POST", f"{BASE_URL}/posts/3/like")

        http_session.request.return_value = make_response(
            body={"favorited": False, "message": "Removido dos favoritos"}
        )
        result = await service.toggle_favorite(3)
        assert result.favorited is False
        assert result.message == "Removido dos favoritos"
        args, _ = http_session.request.call_args
        assert args == ("POST", f"{BASE_URL}/posts/3/favorite")

    @pytest.mark.asyncio
    async def test_relations(self, service, http_session):
        http_session.request.return_value = make_response(
            body=[{"post_id": 1, "user_id": 7}, {"post_id": 4, "user_id": 7}]
        )

        likes = await service.get_user_likes(7)

        assert [relation.post_id for relation in likes] == [1, 4]
        args, _ = http_session.request.call_args
        assert args == ("GET", f"{BASE_URL}/users/7/likes")

    @pytest.mark.asyncio
    async def test_comments_keep_server_order(self, service, http_session):
        http_session.request.return_value = make_response(
            body=[
                {"id": 5, "post_id": 1, "content": "second", "created_at": "2024-01-02"},
                {"id": 2, "post_id": 1, "content": "first", "created_at": "2024-01-01"},
            ]
        )

        comments = await service.get_comments(1)

        assert [comment.id for comment in comments] == [5, 2]

    @pytest.mark.asyncio
    async def test_create_comment(self, service, http_session):
        http_session.request.return_value = make_response(
            body={"id": 3, "post_id": 1, "content": "hi", "username": "alice"}
        )

        comment = await service.create_comment(1, "hi")

        assert comment == Comment(id=3, post_id=1, content="hi", username="alice")
        args, kwargs = http_session.request.call_args
        assert args == ("POST", f"{BASE_URL}/comments/1")
        assert kwargs["json"] == {"content": "hi"}
