"""
Credmgr CLI — entry point for all operations.

Usage:
    credmgr                 # Interactive menu (same as `credmgr menu`)
    credmgr add             # Add a credential (secret and PIN read without echo)
    credmgr list            # List stored credentials
    credmgr delete          # Delete by --index (as shown by list) or --name
    credmgr path            # Show the store file location
    credmgr version         # Show version
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="credmgr",
        description="Credmgr — PIN-protected store for cloud and git credentials.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # menu
    subparsers.add_parser("menu", help="Interactive menu (default)")

    # add
    add_parser = subparsers.add_parser("add", help="Add a credential")
    add_parser.add_argument("--type", choices=["aws", "git"], required=True, dest="kind")
    add_parser.add_argument("--name", required=True, help="Unique display name")
    add_parser.add_argument(
        "--principal", required=True, help="AWS access key ID or git username"
    )
    add_parser.add_argument("--extra", default="", help="AWS region (optional)")

    # list
    subparsers.add_parser("list", help="List stored credentials")

    # delete
    delete_parser = subparsers.add_parser("delete", help="Delete a credential")
    target = delete_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--index", type=int, help="1-based position as shown by 'list'")
    target.add_argument("--name", help="Exact credential name")

    # path
    subparsers.add_parser("path", help="Show the store file location")

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        from credmgr import __version__

        print(f"credmgr {__version__}")
        return 0

    _configure_logging(args.verbose)

    if args.command in (None, "menu"):
        return _cmd_menu()
    elif args.command == "add":
        return _cmd_add(args)
    elif args.command == "list":
        return _cmd_list()
    elif args.command == "delete":
        return _cmd_delete(args)
    elif args.command == "path":
        return _cmd_path()
    else:
        parser.print_help()
        return 0


def _configure_logging(verbose: bool) -> None:
    from credmgr.config import get_config

    level = logging.DEBUG if verbose else getattr(logging, get_config().log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _store():
    from credmgr.config import get_config
    from credmgr.vault import CredentialStore

    return CredentialStore(get_config().store_path)


def _ask_secret(prompt: str) -> str | None:
    try:
        return getpass.getpass(prompt)
    except EOFError:
        print()
        print("Error: no input")
        return None


def _read_pin(prompt: str = "Enter PIN to access credentials: ") -> str | None:
    pin = _ask_secret(prompt)
    if pin is None:
        return None
    if not pin:
        print("Error: PIN cannot be empty")
        return None
    return pin


def _cmd_menu() -> int:
    from credmgr.config import get_config
    from credmgr.menu import Menu

    try:
        return Menu(_store(), get_config()).run()
    except KeyboardInterrupt:
        print()
        return 130


def _cmd_add(args: argparse.Namespace) -> int:
    from pydantic import ValidationError

    from credmgr.vault import Credential, VaultError

    secret = _ask_secret("Secret (AWS secret key or git password/token): ")
    if secret is None:
        return 1
    pin = _read_pin("Enter PIN to encrypt credentials: ")
    if pin is None:
        return 1

    try:
        candidate = Credential(
            kind=args.kind,
            name=args.name,
            principal=args.principal,
            secret=secret,
            auxiliary=args.extra,
        )
    except ValidationError:
        print("Error: name cannot be empty")
        return 1

    try:
        _store().add(pin, candidate)
    except VaultError as e:
        print(f"Error: {e}")
        return 1
    print(f"Credential '{candidate.name}' added.")
    return 0


def _cmd_list() -> int:
    from credmgr.vault import VaultError

    pin = _read_pin()
    if pin is None:
        return 1
    try:
        credentials = _store().list(pin)
    except VaultError as e:
        print(f"Error: {e}")
        return 1

    if not credentials:
        print("No credentials found")
        return 0
    for i, cred in enumerate(credentials, start=1):
        print(f"{i}. {cred.label}")
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    from credmgr.vault import VaultError

    pin = _read_pin()
    if pin is None:
        return 1
    store = _store()
    try:
        if args.name is not None:
            removed = store.remove(pin, args.name)
        else:
            removed = store.remove_at(pin, args.index - 1)
    except VaultError as e:
        print(f"Error: {e}")
        return 1
    print(f"Credential '{removed.name}' deleted.")
    return 0


def _cmd_path() -> int:
    from credmgr.config import get_config

    print(get_config().store_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
