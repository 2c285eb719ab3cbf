from dataclasses import dataclass


@dataclass
class User:
    id: int
    username: str
    email: str = ""
    profile_picture_url: str | None = None
    created_at: str | None = None


@dataclass
class Post:
    id: int
    title: str = ""
    content: str = ""
    username: str = ""  # 작성자
    profile_picture_url: str | None = None  # 작성자 프로필 사진
    image_url: str | None = None
    likes_count: int = 0
    comments_count: int = 0
    created_at: str | None = None
    user_id: int | None = None


@dataclass
class Comment:
    id: int
    post_id: int
    content: str = ""
    username: str = ""
    profile_picture_url: str | None = None
    created_at: str | None = None


@dataclass
class PostRelation:
    """좋아요/즐겨찾기 관계 (존재하면 해당 사용자가 좋아요/즐겨찾기 한 상태)"""

    post_id: int


@dataclass
class LoginResult:
    token: str
    user: User


@dataclass
class LikeResult:
    liked: bool


@dataclass
class FavoriteResult:
    favorited: bool
    message: str = ""
