#!/usr/bin/env python3
"""
Issue an access/refresh token pair for an operator or a client application
"""

import argparse

from menu_api.config import get_settings
from menu_api.security.tokens import TokenService


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("subject", type=int, help="User id carried by the token")
    parser.add_argument("role", help="Role, e.g. admin or manager")
    args = parser.parse_args()

    settings = get_settings()
    tokens = TokenService.from_settings(settings)

    print(f"""
Access token (expires in {settings.jwt_expires_minutes} minutes):
  {tokens.issue(args.subject, args.role)}

Refresh token (expires in {settings.jwt_refresh_expires_days} days):
  {tokens.issue_refresh(args.subject, args.role)}
""")


if __name__ == "__main__":
    main()
