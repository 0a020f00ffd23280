#!/usr/bin/env python3
# scripts/issue_token.py
"""
Issue a bearer token for local testing.

Usage:
    python scripts/issue_token.py alice ROLE_USER
    python scripts/issue_token.py root ROLE_ADMIN --minutes 600
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import JWT_SECRET_KEY, USER_ROLE
from app.core.jwt_auth import create_access_token


def main(argv=None):
    parser = argparse.ArgumentParser(description="Issue a signed bearer token")
    parser.add_argument("username", help="Token subject")
    parser.add_argument("roles", nargs="*", default=[USER_ROLE], help=f"Roles (default: {USER_ROLE})")
    parser.add_argument("--minutes", type=int, default=None, help="Token lifetime in minutes")
    args = parser.parse_args(argv)

    if not JWT_SECRET_KEY:
        print("[ERROR] JWT_SECRET_KEY is not set; tokens would not verify.", file=sys.stderr)
        return 1

    print(create_access_token(args.username, args.roles, expires_minutes=args.minutes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
