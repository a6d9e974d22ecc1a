# src/orange_forum/scripts/manage.py
"""Administrative commands for an Orange Forum installation."""
from __future__ import annotations

import argparse
import getpass
import sys

from orange_forum.core.errors import ForumError
from orange_forum.db.session import SessionLocal, build_engine
from orange_forum.services import config_service, user_service

from .migrate import run_upgrade_head


def cmd_migrate(args: argparse.Namespace) -> int:
    if args.alembic:
        run_upgrade_head(args.url)
    # Seeds default settings; tables already created by Alembic are left as they are.
    config_service.migrate(build_engine(args.url))
    print(f"[manage] schema at version {config_service.MODEL_VERSION}")
    return 0


def cmd_create_superuser(args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    with SessionLocal() as db:
        user = user_service.create_super_user(db, args.username, password)
    print(f"[manage] created super admin {user.username} (id={user.id})")
    return 0


def cmd_reset_token(args: argparse.Namespace) -> int:
    with SessionLocal() as db:
        token = user_service.create_reset_token(db, args.username)
    print(token)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage an Orange Forum installation")
    sub = parser.add_subparsers(dest="command", required=True)

    migrate = sub.add_parser("migrate", help="Create tables and seed default settings")
    migrate.add_argument("--url", default=None, help="Override DATABASE_URL")
    migrate.add_argument(
        "--alembic",
        action="store_true",
        help="Apply Alembic revisions before seeding settings.",
    )
    migrate.set_defaults(func=cmd_migrate)

    superuser = sub.add_parser("create-superuser", help="Create a super admin account")
    superuser.add_argument("username")
    superuser.add_argument("--password", default=None, help="Prompted for when omitted")
    superuser.set_defaults(func=cmd_create_superuser)

    token = sub.add_parser("reset-token", help="Issue a password reset token for a user")
    token.add_argument("username")
    token.set_defaults(func=cmd_reset_token)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ForumError as exc:
        print(f"[manage] ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
