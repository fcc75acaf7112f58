"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SIGNATURE_LOOKUP_URL = "https://api.openchain.xyz/signature-database/v1/lookup"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SettingsConfig:
    rpc_timeout: int = 30
    add_network_endpoint: str = ""
    evm_chain_data_service: str = ""
    signature_lookup_url: str = DEFAULT_SIGNATURE_LOOKUP_URL


@dataclass(frozen=True)
class AccountConfig:
    """Native-denomination balance lookup for a Cosmos network."""

    denom: str = ""
    display_denom: str = ""
    address_pattern: str = ""


@dataclass(frozen=True)
class CosmosNetworkConfig:
    label: str = ""
    rpc: str = ""
    tx_search_per_page: int | None = None
    account: AccountConfig | None = None


@dataclass(frozen=True)
class RemoteEndpoints:
    evm: str | None = None
    svm: str | None = None


@dataclass(frozen=True)
class RemoteNetworkConfig:
    """Same shape as a dynamic ``chain-config`` network descriptor."""

    provider: str = ""
    name: str = ""
    id: str = ""
    endpoints: RemoteEndpoints = field(default_factory=RemoteEndpoints)


@dataclass(frozen=True)
class AppConfig:
    settings: SettingsConfig = field(default_factory=SettingsConfig)
    cosmos_networks: tuple[CosmosNetworkConfig, ...] = ()
    remote_networks: tuple[RemoteNetworkConfig, ...] = ()


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_settings(raw: dict[str, Any]) -> SettingsConfig:
    return SettingsConfig(
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
        add_network_endpoint=(raw.get("add_network_endpoint") or "").rstrip("/"),
        evm_chain_data_service=(raw.get("evm_chain_data_service") or "").rstrip("/"),
        signature_lookup_url=raw.get("signature_lookup_url")
        or DEFAULT_SIGNATURE_LOOKUP_URL,
    )


def _build_account(raw: dict[str, Any] | None) -> AccountConfig | None:
    if not raw:
        return None
    return AccountConfig(
        denom=raw.get("denom", ""),
        display_denom=raw.get("display_denom", ""),
        address_pattern=raw.get("address_pattern", ""),
    )


def _build_cosmos_networks(raw: list[dict[str, Any]]) -> tuple[CosmosNetworkConfig, ...]:
    networks: list[CosmosNetworkConfig] = []
    for n in raw:
        per_page = n.get("tx_search_per_page")
        networks.append(
            CosmosNetworkConfig(
                label=n.get("label", ""),
                rpc=(n.get("rpc") or "").rstrip("/"),
                tx_search_per_page=int(per_page) if per_page else None,
                account=_build_account(n.get("account")),
            )
        )
    return tuple(networks)


def _build_remote_networks(raw: list[dict[str, Any]]) -> tuple[RemoteNetworkConfig, ...]:
    networks: list[RemoteNetworkConfig] = []
    for n in raw:
        endpoints = n.get("endpoints", {})
        networks.append(
            RemoteNetworkConfig(
                provider=n.get("provider", ""),
                name=n.get("name", ""),
                id=n.get("id", ""),
                endpoints=RemoteEndpoints(
                    evm=endpoints.get("evm") or None,
                    svm=endpoints.get("svm") or None,
                ),
            )
        )
    return tuple(networks)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate network configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        settings=_build_settings(raw.get("settings") or {}),
        cosmos_networks=_build_cosmos_networks(raw.get("cosmos_networks") or []),
        remote_networks=_build_remote_networks(raw.get("remote_networks") or []),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    seen: set[str] = set()

    for network in cfg.cosmos_networks:
        if not network.label:
            raise ValueError("Cosmos network has no label")
        if network.label in seen:
            raise ValueError(f"Duplicate network label '{network.label}'")
        seen.add(network.label)

        account = network.account
        if account is None:
            continue
        if not (account.denom and account.display_denom and account.address_pattern):
            raise ValueError(
                f"Network '{network.label}' account config needs denom, "
                "display_denom and address_pattern"
            )
        try:
            re.compile(account.address_pattern)
        except re.error as e:
            raise ValueError(
                f"Network '{network.label}' has an invalid address pattern: {e}"
            ) from e

    for network in cfg.remote_networks:
        if not network.name:
            raise ValueError("Remote network has no name")
        if network.name in seen:
            raise ValueError(f"Duplicate network label '{network.name}'")
        seen.add(network.name)
