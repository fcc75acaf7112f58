"""Entity-type wiring for an EVM network."""
from __future__ import annotations

from functools import partial

from ...config import RemoteNetworkConfig, SettingsConfig
from ...interfaces.transport import Transport
from ...registry import EntityTypeDefinition, Getter
from ..common import no_associated
from .adapter import EvmAdapter


def build_evm_entity_types(
    client: Transport,
    network: RemoteNetworkConfig,
    settings: SettingsConfig,
    prefix: str = "",
) -> list[EntityTypeDefinition]:
    adapter = EvmAdapter(client, network, settings, prefix)
    name = adapter.type_name

    return [
        EntityTypeDefinition(
            name=name("Block"),
            getters=(
                Getter("height", get_one=partial(adapter.get_block, "height")),
                Getter("hash", get_one=partial(adapter.get_block, "hash")),
            ),
            get_associated=adapter.block_transactions,
        ),
        EntityTypeDefinition(
            name=name("Account"),
            getters=(Getter("address", get_one=adapter.get_account),),
            get_associated=adapter.address_transactions,
        ),
        EntityTypeDefinition(
            name=name("Contract"),
            getters=(Getter("address", get_one=adapter.get_contract),),
            get_associated=adapter.address_transactions,
        ),
        EntityTypeDefinition(
            name=name("Transaction"),
            getters=(Getter("hash", get_one=adapter.get_transaction),),
            get_associated=adapter.transaction_logs,
        ),
        EntityTypeDefinition(
            name=name("Log"),
            getters=(Getter("path", get_one=adapter.get_log),),
            get_associated=no_associated,
        ),
    ]
