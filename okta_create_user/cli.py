"""Command-line runner for the Okta create-user action.

This module is a CLI wrapper around okta_create_user.core.provisioning_service.
Secrets and environment come from /run/secrets and environment variables.
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from .config import load_context
from .core.okta.exceptions import OktaActionError
from .core.provisioning_service import halt, invoke


def _params_from_args(args: argparse.Namespace) -> dict[str, str]:
    params = {
        "email": args.email,
        "login": args.login,
        "firstName": args.first_name,
        "lastName": args.last_name,
        "department": args.department,
        "employeeNumber": args.employee_number,
        "groupIds": args.group_ids,
        "additionalProfileAttributes": args.additional_profile_attributes,
        "address": args.address,
    }
    return {key: value for key, value in params.items() if value is not None}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="okta-create-user", description="Okta create-user action")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "WARNING"))

    sub = parser.add_subparsers(dest="cmd")

    si = sub.add_parser("invoke", help="Create the user or return the matching existing one")
    si.add_argument("--email", required=True)
    si.add_argument("--login", required=True)
    si.add_argument("--first-name", required=True)
    si.add_argument("--last-name", required=True)
    si.add_argument("--department")
    si.add_argument("--employee-number")
    si.add_argument("--group-ids", help="Comma-separated Okta group IDs")
    si.add_argument("--additional-profile-attributes", help="JSON object merged into the profile")
    si.add_argument("--address", help="Okta org URL (defaults to ADDRESS env var)")

    sh = sub.add_parser("halt", help="Acknowledge a halt request")
    sh.add_argument("--reason", required=True)
    sh.add_argument("--email")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    context = load_context()

    if args.cmd == "invoke":
        try:
            result = invoke(_params_from_args(args), context)
        except OktaActionError as e:
            status = f" (HTTP {e.status_code})" if e.status_code else ""
            print(f"[create-user] Error{status}: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"[create-user] User '{args.login}' ready (id={result['id']})", file=sys.stderr)
        print(json.dumps(result, indent=2))
    elif args.cmd == "halt":
        print(json.dumps(halt({"reason": args.reason, "email": args.email}, context), indent=2))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
