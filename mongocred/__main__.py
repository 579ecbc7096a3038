"""Check a credential configuration: python3 -m mongocred"""

from __future__ import annotations

import argparse
import json
import os
import sys

from mongocred.authenticators import dispatch
from mongocred.config import Settings, credential_from_settings, parse_mechanism_properties
from mongocred.exceptions import MongoCredError
from mongocred.logging_config import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mongocred",
        description="Validate a database credential and show which authenticator it selects",
    )
    parser.add_argument("--mechanism", type=str, help="Authentication mechanism")
    parser.add_argument("--source", type=str, help="Database holding the user")
    parser.add_argument("--database", type=str, help="Database named in the connection")
    parser.add_argument("--username", type=str, help="Principal name")
    parser.add_argument(
        "--password-env",
        type=str,
        metavar="VAR",
        help="Read the password from this environment variable",
    )
    parser.add_argument(
        "--property",
        action="append",
        default=[],
        metavar="KEY:VALUE",
        help="Mechanism property (repeatable)",
    )
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        overrides: dict[str, object] = {}
        for option, field in (
            ("mechanism", "auth_mechanism"),
            ("source", "auth_source"),
            ("database", "database"),
            ("username", "username"),
        ):
            value = getattr(args, option)
            if value is not None:
                overrides[field] = value
        if args.password_env:
            if args.password_env not in os.environ:
                print(f"Environment variable not set: {args.password_env}", file=sys.stderr)
                return 2
            overrides["password"] = os.environ[args.password_env]

        settings = Settings(**overrides)
        setup_logging(settings.log_format, settings.log_level)
        credential = credential_from_settings(settings)
        if credential is None:
            print("No credential configured (set a username or a mechanism).", file=sys.stderr)
            return 2
        if args.property:
            credential = credential.with_mechanism_properties(
                parse_mechanism_properties(",".join(args.property))
            )
        authenticator = dispatch(credential, default_mechanisms=settings.default_mechanism_list)
    except (MongoCredError, ValueError) as e:
        print(f"Invalid credential: {e}", file=sys.stderr)
        return 2

    summary = {
        "principal": str(credential),
        "mechanism": credential.mechanism or "DEFAULT",
        "authenticator": type(authenticator).__name__,
        "mechanism_properties": sorted(credential.mechanism_properties),
    }
    if args.json:
        print(json.dumps(summary))
    else:
        print(f"Principal:      {summary['principal']}")
        print(f"Mechanism:      {summary['mechanism']}")
        print(f"Authenticator:  {summary['authenticator']}")
        if summary["mechanism_properties"]:
            print(f"Properties:     {', '.join(summary['mechanism_properties'])}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
