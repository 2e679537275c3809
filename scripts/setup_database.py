#!/usr/bin/env python3
"""
Create the waitlist table and its row level security policies.

Reads SUPABASE_URL, SUPABASE_ANON_KEY and SUPABASE_SERVICE_ROLE_KEY from the
environment (or .env). Running it against an already provisioned project is
a no-op.

Usage:
    python scripts/setup_database.py [--check] [--print-sql]

Examples:
    # Provision the project
    python scripts/setup_database.py

    # Only report whether the table exists
    python scripts/setup_database.py --check

    # Print the statement to paste into the Supabase SQL editor
    python scripts/setup_database.py --print-sql
"""

import sys
import os
import argparse

# Add parent directory to path to import services
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.context import AppContext
from services import provisioning_service, waitlist_service
from utils.errors import WaitlistError


def main(argv=None, context=None):
    parser = argparse.ArgumentParser(description='Provision the waitlist table')
    parser.add_argument('--check', action='store_true', help='Only report whether the waitlist table exists')
    parser.add_argument('--print-sql', action='store_true', help='Print the schema statement and exit')
    args = parser.parse_args(argv)

    if args.print_sql:
        print(provisioning_service.get_schema_sql())
        return 0

    try:
        context = context or AppContext.from_env()
        if args.check:
            provisioned = waitlist_service.is_provisioned(context.store)
            print("Waitlist table exists." if provisioned else "Waitlist table is missing.")
            return 0 if provisioned else 1

        result = provisioning_service.ensure_provisioned(context.store)
        print(result['message'])
        return 0
    except (WaitlistError, ValueError) as e:
        print(f"ERROR: {str(e)}", file=sys.stderr)
        print("Run with --print-sql and apply the statement manually in the Supabase SQL editor.", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
