"""Entity-type wiring for a Cosmos / Tendermint network."""
from __future__ import annotations

from functools import partial

from ...config import CosmosNetworkConfig
from ...interfaces.transport import Transport
from ...registry import EntityTypeDefinition, Getter, NetworkDefinition
from ..common import no_associated
from .adapter import CosmosAdapter


def build_cosmos_network(
    config: CosmosNetworkConfig, client: Transport
) -> NetworkDefinition:
    """Block, Transaction and Message types; Account only with an account config."""
    adapter = CosmosAdapter(client, config)

    entity_types = [
        EntityTypeDefinition(
            name="Block",
            getters=(
                Getter("height", get_one=partial(adapter.get_block, "height")),
                Getter("hash", get_one=partial(adapter.get_block, "hash")),
            ),
            get_associated=adapter.block_transactions,
        ),
        EntityTypeDefinition(
            name="Transaction",
            getters=(
                Getter("hash", get_one=adapter.get_transaction),
                Getter("height", get_many=adapter.get_transactions_by_height),
            ),
            get_associated=adapter.transaction_messages,
        ),
        EntityTypeDefinition(
            name="Message",
            getters=(Getter("path", get_one=adapter.get_message),),
            get_associated=no_associated,
        ),
    ]

    if config.account is not None:
        entity_types.append(
            EntityTypeDefinition(
                name="Account",
                getters=(Getter("address", get_one=adapter.get_account),),
                get_associated=adapter.account_transactions,
            )
        )

    return NetworkDefinition(label=config.label, entity_types=tuple(entity_types))
