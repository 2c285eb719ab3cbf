"""
포럼 콘솔 클라이언트
- 모바일 앱의 각 화면 컨트롤러(forum.screens)를 커맨드라인에서 구동합니다.
- 세션(토큰, 사용자 정보)은 FORUM_SESSION_FILE 에 저장되어 명령 사이에 유지됩니다.
- 실행 예시
  python -m forum.main login alice secret
  python -m forum.main feed --query cats
  python -m forum.main comment 3 "좋은 글이네요"
"""

import argparse
import asyncio
import logging
import sys
from typing import Any

import aiohttp

from forum.api.schemas import Comment, Post
from forum.app import ForumApp
from forum.config import Settings, configure_logging, get_settings, init_sentry
from forum.screens.profile import ProfileTab, content_preview
from forum.utils import format_timestamp, resolve_media_url

logger = logging.getLogger("forum")


class ConsoleNavigator:
    def __init__(self) -> None:
        self.stack: list[str] = []

    def navigate(self, screen: str, params: dict[str, Any] | None = None) -> None:
        self.stack.append(screen)
        logger.debug("navigate -> %s %s", screen, params or "")

    def go_back(self) -> None:
        if self.stack:
            self.stack.pop()
        logger.debug("go back -> %s", self.stack[-1] if self.stack else None)

    def reset(self, screen: str) -> None:
        self.stack = [screen]
        logger.debug("reset -> %s", screen)

    @property
    def current(self) -> str | None:
        return self.stack[-1] if self.stack else None


class ConsoleNotifier:
    def __init__(self, assume_yes: bool = False) -> None:
        self.assume_yes = assume_yes

    def alert(self, title: str, message: str) -> None:
        print(f"[{title}] {message}")

    async def confirm(self, title: str, message: str) -> bool:
        if self.assume_yes:
            return True
        answer = await asyncio.to_thread(input, f"[{title}] {message} (y/N) ")
        return answer.strip().lower() in ("y", "yes")


def render_post(post: Post, settings: Settings, liked: bool = False, favorited: bool = False) -> str:
    marks = ("♥" if liked else "♡") + (" ★" if favorited else " ☆")
    lines = [
        f"#{post.id} {post.title} - {post.username} ({format_timestamp(post.created_at)})",
        f"    {post.content}",
    ]
    image = resolve_media_url(post.image_url, settings.media_base_url)
    if image:
        lines.append(f"    [image] {image}")
    lines.append(
        f"    {marks}  likes {post.likes_count} / comments {post.comments_count}"
    )
    return "\n".join(lines)


def render_comment(comment: Comment) -> str:
    return (
        f"  - {comment.username} ({format_timestamp(comment.created_at)}): "
        f"{comment.content}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="forum", description="Forum console client")
    parser.add_argument("--env-file", default=".env", help="Path to .env file")
    parser.add_argument("--yes", action="store_true", help="Answer yes to confirmations")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login")
    login.add_argument("identifier")
    login.add_argument("password")

    register = sub.add_parser("register")
    register.add_argument("username")
    register.add_argument("email")
    register.add_argument("password")

    sub.add_parser("logout")

    feed = sub.add_parser("feed")
    feed.add_argument("--query", default="")

    post = sub.add_parser("post")
    post.add_argument("--title", default="")
    post.add_argument("--content", default="")
    post.add_argument("--image", default=None)

    like = sub.add_parser("like")
    like.add_argument("post_id", type=int)

    favorite = sub.add_parser("favorite")
    favorite.add_argument("post_id", type=int)

    show = sub.add_parser("show")
    show.add_argument("post_id", type=int)

    comment = sub.add_parser("comment")
    comment.add_argument("post_id", type=int)
    comment.add_argument("content")

    profile = sub.add_parser("profile")
    profile.add_argument(
        "--tab",
        choices=[tab.value for tab in ProfileTab],
        default=ProfileTab.MY_POSTS.value,
    )

    edit = sub.add_parser("edit-profile")
    edit.add_argument("--username")
    edit.add_argument("--email")
    edit.add_argument("--picture")
    edit.add_argument("--old-password", default="")
    edit.add_argument("--new-password", default="")
    edit.add_argument("--confirm-password")

    sub.add_parser("delete-account")
    return parser


async def run_command(app: ForumApp, args: argparse.Namespace) -> bool:
    """한 개의 명령을 해당 화면 컨트롤러로 실행"""
    await app.start()
    settings = app.settings

    if args.command == "login":
        return await app.login_screen().login(args.identifier, args.password)

    if args.command == "register":
        return await app.register_screen().register(
            args.username, args.email, args.password
        )

    if args.command in ("logout", "feed", "post", "like", "favorite"):
        home = app.home_screen()
        if args.command == "logout":
            return await home.logout()
        if args.command == "post":
            return (
                await home.create_post(args.title, args.content, args.image)
                is not None
            )
        if args.command == "like":
            return await home.toggle_like(args.post_id) is not None
        if args.command == "favorite":
            return await home.toggle_favorite(args.post_id) is not None

        if not await home.fetch_posts(args.query):
            return False
        for item in home.posts:
            print(
                render_post(
                    item,
                    settings,
                    liked=home.is_liked(item.id),
                    favorited=home.is_favorited(item.id),
                )
            )
        return True

    if args.command in ("show", "comment"):
        detail = app.post_detail_screen(args.post_id)
        if args.command == "comment":
            if await detail.create_comment(args.content) is None:
                return False
        elif not await detail.fetch_post_detail():
            return False
        if detail.post is not None:
            print(render_post(detail.post, settings))
        for item in detail.comments:
            print(render_comment(item))
        return True

    profile = app.profile_screen()
    if not await profile.on_focus():
        return False

    if args.command == "profile":
        profile.select_tab(ProfileTab(args.tab))
        user = profile.user
        print(f"{user.username} <{user.email}>")
        picture = resolve_media_url(user.profile_picture_url, settings.media_base_url)
        if picture:
            print(f"[picture] {picture}")
        for item in profile.visible_posts:
            print(f"#{item.id} {item.title}\n    {content_preview(item)}")
            print(f"    likes {item.likes_count} / comments {item.comments_count}")
        return True

    editor = app.edit_profile_screen(profile.user)
    if args.command == "delete-account":
        return await editor.delete_account()

    fields = {
        name: value
        for name, value in (
            ("username", args.username),
            ("email", args.email),
            ("profile_picture_url", args.picture),
        )
        if value is not None
    }
    return await editor.update_profile(
        fields,
        old_password=args.old_password,
        new_password=args.new_password,
        confirm_new_password=args.confirm_password,
    )


async def amain(args: argparse.Namespace) -> bool:
    settings = get_settings(args.env_file)
    configure_logging(settings.log_level)
    init_sentry(settings)

    async with aiohttp.ClientSession() as http_session:
        app = ForumApp(
            settings,
            http_session,
            ConsoleNavigator(),
            ConsoleNotifier(assume_yes=args.yes),
        )
        return await run_command(app, args)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    ok = asyncio.run(amain(args))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
