"""
Admin Tools - seed and inspect subscription users from the command line

    python admin_tools.py create-user --email someone@example.com --trial-days 7
    python admin_tools.py show-user <user_id>
"""
import argparse
import asyncio
import json
import sys
from typing import Optional

from crud.user import UserRepository
from database import AsyncSessionLocal, init_db


async def create_user(email: Optional[str] = None, trial_days: Optional[int] = None) -> dict:
    """Create a user on a fresh trial and return its record."""
    await init_db()
    user_data = {"email": email}
    if trial_days is not None:
        user_data["trial_days"] = trial_days
    async with AsyncSessionLocal() as session:
        user = await UserRepository(session).create_user(user_data)
        return user.to_dict()


async def show_user(user_id: str) -> Optional[dict]:
    await init_db()
    async with AsyncSessionLocal() as session:
        user = await UserRepository(session).get_user_by_id(user_id)
        return user.to_dict() if user else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Subscription user admin tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-user", help="Create a user on a free trial")
    create.add_argument("--email", default=None)
    create.add_argument("--trial-days", type=int, default=None)

    show = subparsers.add_parser("show-user", help="Print a user record")
    show.add_argument("user_id")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "create-user":
        record = asyncio.run(create_user(args.email, args.trial_days))
    else:
        record = asyncio.run(show_user(args.user_id))
        if record is None:
            print(f"User {args.user_id} not found", file=sys.stderr)
            return 1

    print(json.dumps(record, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
