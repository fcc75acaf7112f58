"""Entity-type wiring for a Solana (SVM) network."""
from __future__ import annotations

from ...config import RemoteNetworkConfig
from ...interfaces.transport import Transport
from ...registry import EntityTypeDefinition, Getter
from ..common import no_associated
from .adapter import SvmAdapter


def build_svm_entity_types(
    client: Transport, network: RemoteNetworkConfig, prefix: str = ""
) -> list[EntityTypeDefinition]:
    adapter = SvmAdapter(client, network, prefix)

    return [
        EntityTypeDefinition(
            name=adapter.type_name("Block"),
            getters=(Getter("slot", get_one=adapter.get_block),),
            get_associated=adapter.block_transactions,
        ),
        EntityTypeDefinition(
            name=adapter.type_name("Transaction"),
            getters=(Getter("signature", get_one=adapter.get_transaction),),
            get_associated=no_associated,
        ),
    ]
