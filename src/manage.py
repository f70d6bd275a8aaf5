"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                  # Create all tables
    python src/manage.py drop-db                   # Drop all tables
    python src/manage.py promote-admin a@b.com     # Grant the admin flag
    python src/manage.py purge-sessions            # Delete revoked and expired sessions
"""

import argparse
import sys


def _initialized_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def promote_admin(email):
    from protean.exceptions import ObjectNotFoundError

    from storefront.identity.admin import GrantAdmin

    domain = _initialized_domain()
    with domain.domain_context():
        try:
            user_id = domain.process(GrantAdmin(email=email), asynchronous=False)
        except ObjectNotFoundError:
            print(f"No user with email {email}")
            sys.exit(1)
    print(f"User {user_id} is now an admin.")


def purge_stale_sessions():
    from storefront.identity.session import purge_sessions

    domain = _initialized_domain()
    with domain.domain_context():
        removed = purge_sessions()
    print(f"Removed {removed} stale sessions.")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    promote_parser = subparsers.add_parser("promote-admin", help="Grant admin rights to a user")
    promote_parser.add_argument("email", help="Email address of an existing user")

    subparsers.add_parser("purge-sessions", help="Delete revoked and expired sessions")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "promote-admin":
        promote_admin(args.email)
    elif args.command == "purge-sessions":
        purge_stale_sessions()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
