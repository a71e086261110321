"""Print an admin bearer token for scripted access to the API.

The token is signed with ``SECRET_KEY`` and issued to the admin
configured via ``ADMIN_ID``/``ADMIN_EMAIL``, exactly as a successful
``POST /admin-auth/login`` would do, but with a custom lifetime.

Usage:
    python create_token.py --days 365
"""
import argparse
from typing import List, Optional

from pizza_api.app.core.config import Settings, settings as default_settings
from pizza_api.app.services.session_service import (
    AdminIdentity,
    AdminSessionService,
    StaticIdentityProvider,
)


def make_token(settings: Settings, days: int) -> str:
    identity = AdminIdentity(
        id=settings.admin_id,
        email=settings.admin_email,
        password=settings.admin_password,
    )
    service = AdminSessionService(
        StaticIdentityProvider(identity),
        secret_key=settings.secret_key,
        token_lifetime_seconds=settings.access_token_expire_minutes * 60,
    )
    return service.issue_token(identity, lifetime_seconds=days * 24 * 60 * 60)


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    ap = argparse.ArgumentParser(description="Issue an admin token for the Pizza Storefront API.")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days (default: 365)")
    args = ap.parse_args(argv)
    if args.days <= 0:
        ap.error("--days must be positive")
    print(make_token(settings or default_settings, args.days))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
