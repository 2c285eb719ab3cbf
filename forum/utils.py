import json
from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any, Type, TypeVar, get_args, get_origin, no_type_check

T = TypeVar("T")


def parse_json(data: Any, default: Any = None) -> Any:
    """데이터를 JSON 형식으로 안전하게 파싱, 실패 시 default 반환"""
    if default is None:
        default = {}
    if isinstance(data, (str, bytes)):
        if not data.strip():
            return default
        try:
            return json.loads(data)
        except json.JSONDecodeError:
            return default
    return data


@no_type_check
def to_dict(obj: Any) -> Any:
    """재귀적으로 dataclass를 dict로 변환"""
    if is_dataclass(obj):
        return {f.name: to_dict(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, (list, tuple)):
        return [to_dict(v) for v in obj]
    elif isinstance(obj, dict):
        return {k: to_dict(v) for k, v in obj.items()}
    else:
        return obj


@no_type_check
def from_dict(cls: Type[T], data: dict[str, Any]) -> T:
    """
    dict에서 dataclass로 복원
    서버가 내려주는 추가 필드는 무시하고, 필수 필드가 없으면 TypeError 가 발생합니다.
    """
    if not is_dataclass(cls):
        return data
    if not isinstance(data, dict):
        raise TypeError(
            f"{cls.__name__} 변환에는 dict 가 필요합니다. ({type(data).__name__})"
        )

    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            continue

        value = data[f.name]
        field_type = f.type

        if is_dataclass(field_type) and value is not None:
            kwargs[f.name] = from_dict(field_type, value)
        elif (
            get_origin(field_type) in (list, tuple)
            and len(get_args(field_type)) > 0
            and is_dataclass(get_args(field_type)[0])
        ):
            item_type = get_args(field_type)[0]
            kwargs[f.name] = [from_dict(item_type, item) for item in value]
        else:
            kwargs[f.name] = value

    return cls(**kwargs)


def resolve_media_url(path: str | None, media_base_url: str) -> str | None:
    """서버가 내려준 상대 경로(/uploads/...)를 절대 URL로 변환"""
    if not path:
        return None
    if path.startswith(("http://", "https://", "file://")):
        return path
    return f"{media_base_url.rstrip('/')}/{path.lstrip('/')}"


def format_timestamp(value: str | None) -> str:
    """ISO 8601 문자열을 로컬 시간 기준 표시용 문자열로 변환"""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")
