"""Mint a short-lived admin bearer token for local development."""

from __future__ import annotations

import sys
from datetime import timedelta

from app.core.config import get_settings
from app.core.security import create_access_token


def main() -> None:
    settings = get_settings()
    subject = sys.argv[1] if len(sys.argv) > 1 else "dev-admin"
    token = create_access_token(
        subject,
        expires_delta=timedelta(hours=8),
        **{settings.admin_role_claim: settings.admin_role_value},
    )
    print(token)


if __name__ == "__main__":
    main()
