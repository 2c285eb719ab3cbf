from typing import Any

UNAUTHORIZED_STATUSES = frozenset({401, 403})


class ForumError(Exception):
    """포럼 API 관련 기본 예외 클래스"""

    pass


class ForumApiError(ForumError):
    """API 요청 실패(4xx/5xx) 시 발생하는 예외"""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"API 오류 (상태 코드: {status}): {message}")

    @property
    def is_unauthorized(self) -> bool:
        return self.status in UNAUTHORIZED_STATUSES


class ForumAuthError(ForumError):
    """인증 토큰 없이 인증이 필요한 요청을 보내려 할 때 발생하는 예외"""

    pass


class ForumResponseError(ForumError):
    """응답 데이터 처리 중 발생하는 예외"""

    def __init__(self, message: str, response: Any | None = None):
        self.message = message
        self.response = response
        super().__init__(message)


class ForumConnectionError(ForumError):
    """네트워크/전송 계층 오류"""

    pass
