# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Inspect the metadata that a module attaches to its classes and
#   functions at import time (through the default engine).
#
# COMMANDS:
# ---------
# 1. List metadata keys (whole chain, or own only):
#    python -m metareflect.cli keys myapp.models:Account
#    python -m metareflect.cli keys myapp.models:Account --member login --own
#
# 2. Show one value (keys are given as strings):
#    python -m metareflect.cli get myapp.models:Account role
#
# 3. Show the parent chain walked by chain lookups:
#    python -m metareflect.cli chain myapp.models:Account
#
# 4. Show members carrying own metadata:
#    python -m metareflect.cli members myapp.models:Account
#
# ==============================================

import argparse
import importlib
import logging
import sys
from typing import Any, List, Optional

from metareflect.config import get_config
from metareflect.errors import MetadataError
from metareflect.runtime import get_default_engine


def resolve_target(target_path: str) -> Any:
    """
    Import "package.module:Qual.Name" and return the named object.

    Raises:
        ValueError: target_path is not of the form module:qualname
    """
    module_name, sep, qualname = target_path.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Target must look like 'module:qualname', got {target_path!r}")

    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


def _describe(target: Any) -> str:
    module = getattr(target, "__module__", None)
    name = getattr(target, "__qualname__", None)
    if module and name:
        return f"{module}.{name}"
    return repr(target)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metareflect",
        description="Inspect metadata attached through metareflect.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    keys_parser = subparsers.add_parser("keys", help="List metadata keys")
    keys_parser.add_argument("target", help="module:qualname")
    keys_parser.add_argument("--member", default=None, help="Member name")
    keys_parser.add_argument("--own", action="store_true", help="Own keys only")

    get_parser = subparsers.add_parser("get", help="Show one metadata value")
    get_parser.add_argument("target", help="module:qualname")
    get_parser.add_argument("key", help="Metadata key (string)")
    get_parser.add_argument("--member", default=None, help="Member name")
    get_parser.add_argument("--own", action="store_true", help="Own value only")

    chain_parser = subparsers.add_parser("chain", help="Show the parent chain")
    chain_parser.add_argument("target", help="module:qualname")

    members_parser = subparsers.add_parser("members", help="List members with metadata")
    members_parser.add_argument("target", help="module:qualname")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()
    logging.basicConfig(level=config.log_level)

    args = build_parser().parse_args(argv)

    try:
        target = resolve_target(args.target)
    except (ImportError, AttributeError, ValueError) as e:
        print(f"✗ Could not resolve target: {e}", file=sys.stderr)
        return 2

    engine = get_default_engine()

    try:
        if args.command == "keys":
            if args.own:
                keys = engine.get_own_metadata_keys(target, args.member)
            else:
                keys = engine.get_metadata_keys(target, args.member)
            for key in keys:
                print(key)

        elif args.command == "get":
            if args.own:
                found = engine.has_own_metadata(args.key, target, args.member)
                value = engine.get_own_metadata(args.key, target, args.member)
            else:
                found = engine.has_metadata(args.key, target, args.member)
                value = engine.get_metadata(args.key, target, args.member)
            if not found:
                print(f"No metadata {args.key!r} on {_describe(target)}", file=sys.stderr)
                return 1
            print(repr(value))

        elif args.command == "chain":
            for depth, current in enumerate(engine.iter_chain(target)):
                print(f"{'  ' * depth}{_describe(current)}")

        elif args.command == "members":
            for member in engine.get_own_member_names(target):
                print("<target>" if member is None else member)

    except MetadataError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
