#!/usr/bin/env python3
"""
Issue a bearer token for local development.

The API only verifies tokens; this script signs one with the configured
``SECRET_KEY`` so the protected routes can be exercised by hand.

Usage:
    python create_token.py guest@example.com --days 7
"""

import argparse

from hotel_booking_api.app.core.security import create_access_token


def main():
    ap = argparse.ArgumentParser(description="Create a development bearer token.")
    ap.add_argument("email", help="Email claim of the token")
    ap.add_argument("--days", type=int, default=1, help="Lifetime in days (default: 1)")
    args = ap.parse_args()

    token = create_access_token({"email": args.email}, expires_delta=args.days * 24 * 60 * 60)
    print(token)


if __name__ == "__main__":
    main()
