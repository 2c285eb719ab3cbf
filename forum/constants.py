from typing import Final

DEFAULT_API_BASE_URL: Final[str] = "http://localhost:3001"
"""포럼 API 기본 URL (FORUM_API_BASE_URL 로 덮어쓸 수 있음)"""

DEFAULT_SESSION_FILE: Final[str] = "~/.forum/session.json"

# 로컬 세션 저장소 키
USER_TOKEN_KEY: Final[str] = "userToken"
USER_DATA_KEY: Final[str] = "userData"

# 화면 이름 (Navigator 에 전달)
LOGIN_SCREEN: Final[str] = "Login"
REGISTER_SCREEN: Final[str] = "Register"
HOME_SCREEN: Final[str] = "Home"
POST_DETAIL_SCREEN: Final[str] = "PostDetail"
PROFILE_SCREEN: Final[str] = "Profile"
EDIT_PROFILE_SCREEN: Final[str] = "EditProfile"

# 알림 제목
TITLE_SUCCESS: Final[str] = "성공"
TITLE_ERROR: Final[str] = "오류"
TITLE_NOTICE: Final[str] = "알림"
TITLE_LOGIN_ERROR: Final[str] = "로그인 오류"
TITLE_REGISTER_ERROR: Final[str] = "회원가입 오류"
TITLE_AUTH_ERROR: Final[str] = "인증 오류"
TITLE_LOGOUT: Final[str] = "로그아웃"
TITLE_CONFIRM: Final[str] = "확인"

# 사용자 안내 메시지
MSG_LOGIN_SUCCESS: Final[str] = "로그인에 성공했습니다!"
MSG_LOGIN_FAILED: Final[str] = "로그인 중 오류가 발생했습니다."
MSG_REGISTER_SUCCESS: Final[str] = "회원가입이 완료되었습니다! 로그인 후 이용해주세요."
MSG_REGISTER_FAILED: Final[str] = "회원가입 중 오류가 발생했습니다."
MSG_POSTS_LOAD_FAILED: Final[str] = "게시글을 불러올 수 없습니다."
MSG_POST_EMPTY: Final[str] = "게시글을 작성하려면 제목 또는 내용을 입력하세요."
MSG_POST_CREATE_FAILED: Final[str] = "게시글을 작성할 수 없습니다."
MSG_LIKE_LOGIN_REQUIRED: Final[str] = "좋아요를 누르려면 로그인이 필요합니다."
MSG_LIKE_FAILED: Final[str] = "좋아요를 처리할 수 없습니다."
MSG_FAVORITE_LOGIN_REQUIRED: Final[str] = "즐겨찾기를 하려면 로그인이 필요합니다."
MSG_FAVORITE_FAILED: Final[str] = "즐겨찾기를 처리할 수 없습니다."
MSG_POST_LOGIN_REQUIRED: Final[str] = "게시글을 작성하려면 로그인이 필요합니다."
MSG_LOGOUT_CONFIRM: Final[str] = "정말 로그아웃하시겠습니까?"
MSG_POST_LOAD_FAILED: Final[str] = "게시글을 불러올 수 없습니다."
MSG_COMMENT_EMPTY: Final[str] = "댓글 내용은 비워둘 수 없습니다."
MSG_COMMENT_LOGIN_REQUIRED: Final[str] = "댓글을 작성하려면 로그인이 필요합니다."
MSG_COMMENT_FAILED: Final[str] = "댓글 작성 중 오류가 발생했습니다."
MSG_TOKEN_NOT_FOUND: Final[str] = "토큰을 찾을 수 없습니다."
MSG_PROFILE_LOAD_FAILED: Final[str] = "프로필을 불러올 수 없습니다."
MSG_NOT_LOGGED_IN: Final[str] = "로그인되어 있지 않습니다."
MSG_PASSWORD_MISMATCH: Final[str] = "새 비밀번호와 확인 비밀번호가 일치하지 않습니다."
MSG_NO_CHANGES: Final[str] = "변경된 내용이 없습니다."
MSG_PROFILE_UPDATE_FAILED: Final[str] = "프로필을 수정할 수 없습니다."
MSG_PROFILE_UPDATED: Final[str] = "프로필이 수정되었습니다."
MSG_DELETE_CONFIRM: Final[str] = "정말 계정을 삭제하시겠습니까? 이 작업은 되돌릴 수 없습니다."
MSG_DELETE_FAILED: Final[str] = "계정을 삭제할 수 없습니다."

PREVIEW_LENGTH: Final[int] = 100
"""프로필 화면 게시글 미리보기 글자 수"""
