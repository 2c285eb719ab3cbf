import asyncio
import json
import logging
from pathlib import Path

from forum.auth.encryption import TokenEncryption

logger = logging.getLogger(__name__)


class MemoryStorage:
    """프로세스 메모리에만 유지되는 저장소 (테스트, 일회성 실행용)"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """
    JSON 파일 기반 저장소
    encryption 이 주어지면 모든 값을 암호화해서 기록합니다.
    """

    def __init__(
        self, path: str | Path, encryption: TokenEncryption | None = None
    ):
        self.path = Path(path).expanduser()
        self.encryption = encryption
        # 읽기-수정-쓰기 구간 직렬화
        self._lock = asyncio.Lock()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed session file %s", self.path)
            return {}
        return data

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    async def get_item(self, key: str) -> str | None:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
        value = data.get(key)
        if value is None or self.encryption is None:
            return value
        try:
            return self.encryption.decrypt(value)
        except ValueError:
            # 키가 바뀌었거나 값이 손상된 경우
            logger.warning("Failed to decrypt stored value for %s", key)
            return None

    def _set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = (
            self.encryption.encrypt(value) if self.encryption else value
        )
        self._dump(data)

    def _remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._set, key, value)

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._remove, key)
