"""
Azure AD remove-from-group action runner.
Runs one lifecycle callback (invoke, error or halt) and prints its result
as JSON.
"""
import argparse
import json
import sys

import aiohttp

from aad_group_removal import run_error_sync, run_halt_sync, run_invoke_sync
from aad_group_removal.config import ConfigLoader, load_action_settings
from aad_group_removal.errors import ActionError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Remove a user from an Azure AD group")
    parser.add_argument("--config-file", default="configs/config.json")
    parser.add_argument("--environment", default=None, help="Selects envs/.env.<environment>")
    sub = parser.add_subparsers(dest="command", required=True)

    invoke = sub.add_parser("invoke", help="Remove the user from the group")
    invoke.add_argument("--user-principal-name", dest="userPrincipalName")
    invoke.add_argument("--group-id", dest="groupId")
    invoke.add_argument("--address", default=None, help="Override the ADDRESS base URL")

    error = sub.add_parser("error", help="Classify a failure message")
    error.add_argument("--message", required=True)
    error.add_argument("--user-principal-name", dest="userPrincipalName")
    error.add_argument("--group-id", dest="groupId")

    halt = sub.add_parser("halt", help="Report a graceful halt")
    halt.add_argument("--reason", default=None)
    halt.add_argument("--user-principal-name", dest="userPrincipalName")
    halt.add_argument("--group-id", dest="groupId")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(config_file=args.config_file, environment=args.environment)
    loader.setup_logging()
    settings = load_action_settings(config_loader=loader)

    params = {
        key: value
        for key, value in vars(args).items()
        if key in ("userPrincipalName", "groupId", "address", "reason") and value is not None
    }

    try:
        if args.command == "invoke":
            result = run_invoke_sync(params, settings=settings)
        elif args.command == "error":
            params["error"] = {"message": args.message}
            result = run_error_sync(params, settings=settings)
        else:
            result = run_halt_sync(params, settings=settings)
    except (ActionError, aiohttp.ClientError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
