"""Service modules"""
from .bootstrap import build_registry, create_resolver
from .network_loader import add_remote, build_remote_network, load_dynamic_networks
from .resolver import Resolver

__all__ = [
    "Resolver",
    "build_registry",
    "create_resolver",
    "add_remote",
    "build_remote_network",
    "load_dynamic_networks",
]
