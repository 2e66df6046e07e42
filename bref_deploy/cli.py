"""Command line interface: `bref init`, `bref deploy`, `bref invoke`."""

import argparse
import sys

from bref_deploy.deployer import Deployer
from bref_deploy.exceptions import BrefError
from bref_deploy.init import init_project
from bref_deploy.logging import setup_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bref", description="Deploy PHP applications on serverless platforms")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level override (case-insensitive)",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init", help="Create `serverless.yml` and `bref.php` in the current directory")
    subparsers.add_parser("deploy", help="Build the project and deploy it")

    invoke = subparsers.add_parser("invoke", help="Build the project and invoke a function locally")
    invoke.add_argument("-f", "--function", required=True, help="Name of the function to invoke")
    invoke.add_argument("-d", "--data", help="JSON event passed to the function")
    invoke.add_argument("--raw", action="store_true", help="Pass the data as a raw string instead of JSON")
    return parser


def _run(args: argparse.Namespace) -> None:
    if args.command == "init":
        created = init_project()
        for path in created:
            print(f"✓ Created {path.name}")
        if not created:
            print("→ Project already initialized")
    elif args.command == "deploy":
        Deployer().deploy()
        print("✓ Deployment success")
    else:
        output = Deployer().invoke(args.function, args.data, args.raw)
        sys.stdout.write(output)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the `bref` command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    setup_logging(level=args.log_level)

    try:
        _run(args)
    except KeyboardInterrupt:
        print("\n✗ Cancelled by user", file=sys.stderr)
        return 1
    except BrefError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
