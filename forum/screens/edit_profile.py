import logging
from typing import Any

from forum.api.schemas import User
from forum.constants import (
    MSG_DELETE_CONFIRM,
    MSG_DELETE_FAILED,
    MSG_NO_CHANGES,
    MSG_NOT_LOGGED_IN,
    MSG_PASSWORD_MISMATCH,
    MSG_PROFILE_UPDATE_FAILED,
    MSG_PROFILE_UPDATED,
    TITLE_CONFIRM,
    TITLE_ERROR,
    TITLE_NOTICE,
    TITLE_SUCCESS,
)
from forum.screens.base import BaseScreen, ScreenState, ViewState

logger = logging.getLogger("forum.screens")

EDITABLE_FIELDS = ("username", "email", "profile_picture_url")


class EditProfileScreen(BaseScreen):
    """
    프로필 수정 화면
    진입 시점의 사용자 정보(initial_user)와 비교해 바뀐 필드만 서버에 보냅니다.
    """

    def __init__(self, initial_user: User, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.initial_user = initial_user
        self.state = ScreenState()
        self.delete_state = ScreenState()

        self.username = initial_user.username
        self.email = initial_user.email
        self.profile_picture_url = initial_user.profile_picture_url
        self.old_password = ""
        self.new_password = ""
        self.confirm_new_password = ""

    def set_fields(self, **fields: Any) -> None:
        for name, value in fields.items():
            if name not in EDITABLE_FIELDS:
                raise ValueError(f"수정할 수 없는 필드입니다: {name}")
            setattr(self, name, value)

    def pick_image(self, image_ref: str) -> None:
        self.profile_picture_url = image_ref

    def build_update_payload(self) -> dict[str, Any]:
        """초기값과 다른 필드만, 새 비밀번호가 있으면 기존/새 비밀번호를 함께 담음"""
        payload: dict[str, Any] = {
            name: getattr(self, name)
            for name in EDITABLE_FIELDS
            if getattr(self, name) != getattr(self.initial_user, name)
        }
        if self.new_password:
            payload["old_password"] = self.old_password
            payload["new_password"] = self.new_password
        return payload

    async def update_profile(
        self,
        fields: dict[str, Any] | None = None,
        old_password: str | None = None,
        new_password: str | None = None,
        confirm_new_password: str | None = None,
    ) -> bool:
        """
        프로필을 부분 수정합니다.

        Args:
            fields: username / email / profile_picture_url 중 변경할 값
            old_password: 기존 비밀번호 (새 비밀번호 지정 시 함께 전송)
            new_password: 새 비밀번호
            confirm_new_password: 새 비밀번호 확인. None 이면 new_password 와 같다고 간주

        Returns:
            bool: 서버 반영 성공 여부 (변경 사항이 없으면 False)
        """
        if fields:
            self.set_fields(**fields)
        if old_password is not None:
            self.old_password = old_password
        if new_password is not None:
            self.new_password = new_password
            if confirm_new_password is None:
                confirm_new_password = new_password
        if confirm_new_password is not None:
            self.confirm_new_password = confirm_new_password

        if self.new_password and self.new_password != self.confirm_new_password:
            self.notifier.alert(TITLE_ERROR, MSG_PASSWORD_MISMATCH)
            return False

        if not await self._require_token(MSG_NOT_LOGGED_IN):
            return False

        payload = self.build_update_payload()
        if not payload:
            self.notifier.alert(TITLE_NOTICE, MSG_NO_CHANGES)
            return False

        if not self._begin(self.state, ViewState.SUBMITTING):
            return False
        with self.state.settling(MSG_PROFILE_UPDATE_FAILED):
            try:
                message = await self.client.update_me(payload)
            except Exception as e:
                # 프로필 수정은 401 에서만 강제 로그아웃 (403 은 비밀번호 불일치 등)
                error_message = await self._handle_error(
                    e, MSG_PROFILE_UPDATE_FAILED, sign_out_statuses=(401,)
                )
                self.state.fail(error_message)
                return False
            self.state.succeed()

        logger.info("Updated profile fields %s", sorted(payload))
        self.notifier.alert(TITLE_SUCCESS, message or MSG_PROFILE_UPDATED)
        self.navigator.go_back()
        return True

    async def delete_account(self) -> bool:
        """확인 단계를 거친 뒤 계정을 삭제하고 로그아웃"""
        if not await self.notifier.confirm(TITLE_CONFIRM, MSG_DELETE_CONFIRM):
            return False
        if not await self._require_token(MSG_NOT_LOGGED_IN):
            return False
        if not self._begin(self.delete_state, ViewState.SUBMITTING):
            return False

        with self.delete_state.settling(MSG_DELETE_FAILED):
            try:
                await self.client.delete_me()
            except Exception as e:
                message = await self._handle_error(e, MSG_DELETE_FAILED)
                self.delete_state.fail(message)
                return False
            self.delete_state.succeed()

        logger.info("Deleted account %s", self.initial_user.id)
        await self.session.sign_out()
        return True
