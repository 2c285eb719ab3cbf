import json
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from forum.api.client import ForumClient
from forum.api.schemas import Post, User
from forum.auth.session import AuthSession
from forum.auth.storage import MemoryStorage
from forum.constants import USER_DATA_KEY, USER_TOKEN_KEY

BASE_URL = "http://forum.test"


def make_response(status=200, body=None, text=None):
    """aiohttp.ClientResponse 대용 mock"""
    response = MagicMock()
    response.status = status
    if text is None:
        text = "" if body is None else json.dumps(body)
    response.text = AsyncMock(return_value=text)
    return response


@pytest.fixture(autouse=True)
def reset_forum_client():
    """테스트마다 싱글톤 초기화"""
    ForumClient.reset_client()
    yield
    ForumClient.reset_client()


@pytest.fixture
def http_session():
    session = MagicMock()
    session.request = AsyncMock(return_value=make_response(body={}))
    return session


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def navigator():
    return MagicMock()


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.confirm = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def client():
    """ForumClient mock (async 메서드는 AsyncMock 으로 생성됨)"""
    return MagicMock(spec=ForumClient)


@pytest.fixture
def user():
    return User(
        id=1,
        username="alice",
        email="alice@example.com",
        profile_picture_url="/uploads/alice.png",
    )


@pytest.fixture
def auth_session(storage, client):
    return AuthSession(storage, client)


@pytest_asyncio.fixture
async def signed_in_session(auth_session, user):
    await auth_session.sign_in("t1", user)
    return auth_session


@pytest.fixture
def screen_deps(signed_in_session, client, navigator, notifier):
    return (signed_in_session, client, navigator, notifier)


@pytest.fixture
def posts():
    return [
        Post(id=1, title="Cats", content="All about cats", username="bob", likes_count=3),
        Post(id=2, title="Dogs", content="All about dogs", username="carol", likes_count=0),
    ]


@pytest.fixture
def stored_session_storage(user):
    return MemoryStorage(
        {
            USER_TOKEN_KEY: "stored-token",
            USER_DATA_KEY: json.dumps({"id": user.id, "username": user.username}),
        }
    )


class BrokenStorage(MemoryStorage):
    """디스크 쓰기가 실패하는 저장소"""

    async def set_item(self, key, value):
        raise OSError("disk full")

    async def remove_item(self, key):
        raise OSError("disk full")
