from typing import Any, Awaitable, Protocol


class HttpSession(Protocol):
    """HTTP 비동기 세션을 위한 프로토콜."""

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Any | None = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Awaitable[Any]:
        """
        HTTP 요청을 수행합니다.

        Args:
            method: HTTP 메서드 (GET, POST, PUT, DELETE)
            url: 요청 URL
            json: 요청 본문 (JSON)
            params: 쿼리 스트링 파라미터
            headers: 요청 헤더

        Returns:
            status 와 text() 를 가진 응답 객체 (aiohttp.ClientResponse 등)
        """
        ...


class KeyValueStorage(Protocol):
    """세션 토큰과 사용자 정보를 보관하는 로컬 저장소 프로토콜."""

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def remove_item(self, key: str) -> None: ...


class Navigator(Protocol):
    """화면 전환을 담당하는 프로토콜."""

    def navigate(
        self, screen: str, params: dict[str, Any] | None = None
    ) -> None: ...

    def go_back(self) -> None: ...

    def reset(self, screen: str) -> None:
        """스택을 비우고 주어진 화면을 루트로 만듭니다."""
        ...


class Notifier(Protocol):
    """사용자에게 알림과 확인 창을 띄우는 프로토콜."""

    def alert(self, title: str, message: str) -> None: ...

    async def confirm(self, title: str, message: str) -> bool:
        """
        확인/취소 선택지를 보여줍니다.

        Returns:
            bool: 사용자가 확인을 선택한 경우 True
        """
        ...
