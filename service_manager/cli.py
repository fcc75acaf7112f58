"""Command-line interface for the multi-chain service manager."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from .config import load_config
from .logging_setup import configure_logging
from .rpc import RpcClient
from .services import Resolver, create_resolver, load_dynamic_networks


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="service-manager",
        description="Resolve blocks, transactions, accounts and logs across chains",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--dynamic",
        action="store_true",
        help="Also register the networks published by the add-network endpoint",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("networks", help="List registered networks and entity types")

    resolve_parser = sub.add_parser("resolve", help="Resolve an entity")
    _add_lookup_arguments(resolve_parser)
    resolve_parser.add_argument(
        "--many",
        action="store_true",
        help="Use a getter that returns several entities (e.g. transactions by height)",
    )

    associated_parser = sub.add_parser(
        "associated", help="Resolve an entity and list its associated entities"
    )
    _add_lookup_arguments(associated_parser)

    return parser


def _add_lookup_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("network", help="Network label, e.g. Ethereum")
    parser.add_argument("entity_type", help="Entity type, e.g. Block")
    parser.add_argument("field", help="Lookup field, e.g. height")
    parser.add_argument("value", help="Value to look up")


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the process exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    client = RpcClient(timeout=config.settings.rpc_timeout)
    resolver = create_resolver(config, client)

    if args.dynamic:
        await load_dynamic_networks(resolver.registry, client, config.settings)

    if args.command == "networks":
        return _list_networks(resolver)
    if args.command == "resolve":
        return await _resolve(resolver, args)
    if args.command == "associated":
        return await _associated(resolver, args)

    build_parser().print_help()
    return 1


def _list_networks(resolver: Resolver) -> int:
    registry = resolver.registry
    _print_json(
        {
            label: [t.name for t in registry.get_network(label).entity_types]
            for label in registry.networks()
        }
    )
    return 0


async def _resolve(resolver: Resolver, args: argparse.Namespace) -> int:
    if args.many:
        entities = await resolver.resolve_many(
            args.network, args.entity_type, args.field, args.value
        )
        _print_json([e.to_dict() for e in entities])
        return 0 if entities else 1

    entity = await resolver.resolve_one(args.network, args.entity_type, args.field, args.value)
    if entity is None:
        print(f"No {args.entity_type} with {args.field} {args.value} on {args.network}")
        return 1
    _print_json(entity.to_dict())
    return 0


async def _associated(resolver: Resolver, args: argparse.Namespace) -> int:
    entity = await resolver.resolve_one(args.network, args.entity_type, args.field, args.value)
    if entity is None:
        print(f"No {args.entity_type} with {args.field} {args.value} on {args.network}")
        return 1
    refs = await resolver.resolve_associated(entity)
    _print_json([ref.to_dict() for ref in refs])
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
