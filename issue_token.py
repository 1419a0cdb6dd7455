"""
issue_token.py
--------------
Mint a tenant-scoped access token for a service caller or a local test run.
The tenant must already exist (POST /api/v1/tenants) for the token to be
accepted.

Usage:
    python issue_token.py <tenant_id> [--subject NAME] [--minutes N]
"""

import argparse
from datetime import timedelta

from backoffice.core.security import create_access_token
from backoffice.services.tenant_scoping import normalize_tenant_id


def main() -> None:
    parser = argparse.ArgumentParser(description="Mint a tenant-scoped access token")
    parser.add_argument("tenant_id", help="Tenant UUID the token is scoped to")
    parser.add_argument("--subject", default="service", help="Principal name (sub claim)")
    parser.add_argument("--minutes", type=int, default=None, help="Token lifetime in minutes")
    args = parser.parse_args()

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    tenant_id = normalize_tenant_id(args.tenant_id)
    print(create_access_token(args.subject, tenant_id, expires_delta=expires))


if __name__ == "__main__":
    main()
