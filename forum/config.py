import logging
import logging.config
from dataclasses import dataclass
from pathlib import Path

import environ
import sentry_sdk

from forum.constants import DEFAULT_API_BASE_URL, DEFAULT_SESSION_FILE

logger = logging.getLogger("forum")


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    media_base_url: str
    session_file: Path
    storage_key: str
    log_level: str
    sentry_dsn: str
    sentry_environment: str


def get_settings(env_file: str | Path | None = None) -> Settings:
    """
    환경 변수(및 .env 파일)에서 설정을 읽습니다.

    Args:
        env_file: 읽을 .env 파일 경로 (없으면 환경 변수만 사용)

    Returns:
        Settings: 불변 설정 객체

    Raises:
        ValueError: FORUM_STORAGE_KEY 가 32바이트가 아닌 경우
    """
    env = environ.Env(
        FORUM_API_BASE_URL=(str, DEFAULT_API_BASE_URL),
        FORUM_MEDIA_BASE_URL=(str, ""),
        FORUM_SESSION_FILE=(str, DEFAULT_SESSION_FILE),
        FORUM_STORAGE_KEY=(str, ""),
        FORUM_LOG_LEVEL=(str, "INFO"),
        SENTRY_DSN=(str, ""),
        SENTRY_ENVIRONMENT=(str, "local"),
    )
    if env_file and Path(env_file).exists():
        environ.Env.read_env(str(env_file))

    storage_key = env("FORUM_STORAGE_KEY")
    if storage_key and len(storage_key.encode()) != 32:
        raise ValueError("FORUM_STORAGE_KEY must be 32 bytes.")

    api_base_url = env("FORUM_API_BASE_URL")
    return Settings(
        api_base_url=api_base_url,
        media_base_url=env("FORUM_MEDIA_BASE_URL") or api_base_url,
        session_file=Path(env("FORUM_SESSION_FILE")).expanduser(),
        storage_key=storage_key,
        log_level=env("FORUM_LOG_LEVEL").upper(),
        sentry_dsn=env("SENTRY_DSN"),
        sentry_environment=env("SENTRY_ENVIRONMENT"),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "verbose": {
                    "format": "[{asctime}] {levelname} {name}: {message}",
                    "style": "{",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "verbose",
                },
            },
            "loggers": {
                "forum": {
                    "handlers": ["console"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )


def init_sentry(settings: Settings) -> bool:
    """SENTRY_DSN 이 설정된 경우에만 sentry 를 초기화"""
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment,
        traces_sample_rate=0.0,
        send_default_pii=False,
    )
    logger.info("Sentry initialized (%s)", settings.sentry_environment)
    return True
