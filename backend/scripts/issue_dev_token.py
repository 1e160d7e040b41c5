#!/usr/bin/env python3
"""
로컬 개발용 access token 발급 스크립트.

운영 환경에서는 외부 identity provider 가 토큰을 발급하고, API 는 검증만 한다.
이 스크립트는 같은 JWT_SECRET_KEY 로 provider 와 같은 모양의 토큰을 만든다.

사용법 (backend 디렉토리에서):
  python scripts/issue_dev_token.py alice@example.com
  python scripts/issue_dev_token.py alice@example.com --name "Alice" --user-id <uuid>

발급한 토큰으로 호출:
  curl -H "Authorization: Bearer <token>" http://localhost:8000/api/v1/dashboard/
"""
import argparse
import os
import sys
import uuid

# backend/feedback_wall 을 import 하기 위해 backend 디렉토리를 path 에 추가
_backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_dir not in sys.path:
    sys.path.insert(0, _backend_dir)


def print_section(title: str) -> None:
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development access token")
    parser.add_argument("email")
    parser.add_argument("--name", default=None, help="display_name stored in user_metadata")
    parser.add_argument("--user-id", default=None, help="identity UUID (random when omitted)")
    args = parser.parse_args()

    from feedback_wall.config import get_settings
    from feedback_wall.core.security import create_access_token

    try:
        user_id = uuid.UUID(args.user_id) if args.user_id else uuid.uuid4()
    except ValueError:
        print(f"  [FAIL] --user-id 가 UUID 형식이 아닙니다: {args.user_id}")
        sys.exit(1)

    metadata = {"display_name": args.name} if args.name else {}
    token = create_access_token(user_id, args.email, metadata)

    settings = get_settings()
    print_section("Development access token")
    print(f"  user_id:  {user_id}")
    print(f"  email:    {args.email}")
    print(f"  expires:  {settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES} min")
    print(f"\n{token}\n")


if __name__ == "__main__":
    main()
