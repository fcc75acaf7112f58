"""Solana JSON-RPC adapter: blocks by slot, transactions by signature."""
from __future__ import annotations

import logging

from ...config import RemoteNetworkConfig
from ...interfaces.transport import Transport
from ...metadata import build_metadata, status
from ...models import AssociatedRef, Entity, EntityContext
from ..common import format_timestamp, log_lookup_failure, validate, validate_raw
from .schemas import SvmBlock, SvmTransaction

logger = logging.getLogger(__name__)

# Highest versioned-transaction format we can render.
MAX_SUPPORTED_TRANSACTION_VERSION = 0


class SvmAdapter:
    """Resolve Solana entities against one JSON-RPC endpoint."""

    def __init__(
        self, client: Transport, network: RemoteNetworkConfig, prefix: str = ""
    ) -> None:
        self._client = client
        self._endpoint = network.endpoints.svm or ""
        self._network = network.name
        self._prefix = prefix

    def type_name(self, base: str) -> str:
        return f"{self._prefix}{base}"

    def _context(self, base: str) -> EntityContext:
        return EntityContext(network=self._network, entity_type_name=self.type_name(base))

    async def get_block(self, slot: str) -> Entity | None:
        try:
            result = await self._client.rpc_call(
                self._endpoint,
                "getBlock",
                [int(slot), {"transactionDetails": "signatures"}],
            )
            block = validate(SvmBlock, result)
        except Exception as e:
            log_lookup_failure("block by slot", self._network, slot, e)
            return None

        return Entity(
            unique_identifier=block.blockhash,
            unique_identifier_label="hash",
            metadata=build_metadata(
                {
                    "Slot": slot,
                    "Block Height": block.blockHeight,
                    "Time": format_timestamp(block.blockTime)
                    if block.blockTime is not None
                    else None,
                    "Parent Slot": block.parentSlot,
                    "Previous Blockhash": block.previousBlockhash,
                }
            ),
            context=self._context("Block"),
            raw=block.model_dump_json(),
        )

    async def block_transactions(self, entity: Entity) -> list[AssociatedRef]:
        """One Transaction reference per signature in the block."""
        try:
            block = validate_raw(SvmBlock, entity.raw)
        except Exception as e:
            log_lookup_failure("block transactions", self._network, entity.unique_identifier, e)
            return []

        return [
            AssociatedRef(
                network_label=self._network,
                entity_type=self.type_name("Transaction"),
                field_name="signature",
                field_value=signature,
            )
            for signature in block.signatures
        ]

    async def get_transaction(self, signature: str) -> Entity | None:
        try:
            result = await self._client.rpc_call(
                self._endpoint,
                "getTransaction",
                [signature, {"maxSupportedTransactionVersion": MAX_SUPPORTED_TRANSACTION_VERSION}],
            )
            tx = validate(SvmTransaction, result)
        except Exception as e:
            log_lookup_failure("transaction by signature", self._network, signature, e)
            return None

        # The fee payer is the first account key and always the first signer.
        account_keys = tx.transaction.message.accountKeys
        return Entity(
            unique_identifier=signature,
            unique_identifier_label="signature",
            metadata=build_metadata(
                {
                    "Slot": tx.slot,
                    "Signer": account_keys[0] if account_keys else None,
                    "Fee": tx.meta.fee,
                    "Status": status(tx.meta.err is None),
                }
            ),
            context=self._context("Transaction"),
            raw=tx.model_dump_json(),
        )
