from typing import Final

# 인증
LOGIN_PATH: Final[str] = "/auth/login"
REGISTER_PATH: Final[str] = "/auth/register"

# 사용자
ME_PATH: Final[str] = "/users/me"
MY_POSTS_PATH: Final[str] = "/users/me/posts"
MY_FAVORITES_PATH: Final[str] = "/users/me/favorites"
USER_LIKES_PATH: Final[str] = "/users/{user_id}/likes"
USER_FAVORITES_PATH: Final[str] = "/users/{user_id}/favorites"

# 게시글
POSTS_PATH: Final[str] = "/posts"
POST_PATH: Final[str] = "/posts/{post_id}"
POST_LIKE_PATH: Final[str] = "/posts/{post_id}/like"
POST_FAVORITE_PATH: Final[str] = "/posts/{post_id}/favorite"

# 댓글
COMMENTS_PATH: Final[str] = "/comments/{post_id}"

SEARCH_PARAM: Final[str] = "q"
"""게시글 검색어 쿼리 파라미터 (서버가 제목/내용으로 필터링)"""
