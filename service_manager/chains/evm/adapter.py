"""Ethereum JSON-RPC adapter: blocks, transactions, logs and addresses."""
from __future__ import annotations

import logging
from decimal import Decimal

from ...config import RemoteNetworkConfig, SettingsConfig
from ...errors import BadResponseError
from ...interfaces.transport import Transport
from ...metadata import build_metadata, status
from ...models import AssociatedRef, Entity, EntityContext
from ..common import (
    format_timestamp,
    is_evm_address,
    log_lookup_failure,
    validate,
    validate_raw,
)
from .schemas import (
    ChainDataTransactions,
    EvmAddressRecord,
    EvmBlock,
    EvmReceipt,
    EvmTransaction,
    SignatureLookup,
    dump,
)

logger = logging.getLogger(__name__)

WEI_PER_ETHER = Decimal(10**18)


def convert_hex(value: str | None) -> str | None:
    """Decode a ``0x`` quantity to a decimal string; other strings pass through."""
    if not value:
        return None
    if value.startswith("0x"):
        return str(int(value, 16))
    return value


def format_ether(wei: int) -> str:
    """Exact wei -> ether conversion without exponent notation."""
    return f"{(Decimal(wei) / WEI_PER_ETHER).normalize():f}"


def _prefixed(value: str) -> str:
    return value if value.startswith("0x") else f"0x{value}"


class EvmAdapter:
    """Resolve EVM entities against one JSON-RPC endpoint."""

    def __init__(
        self,
        client: Transport,
        network: RemoteNetworkConfig,
        settings: SettingsConfig,
        prefix: str = "",
    ) -> None:
        self._client = client
        self._endpoint = network.endpoints.evm or ""
        self._network = network.name
        self._provider = network.provider
        self._chain_id = network.id
        self._chain_data_service = settings.evm_chain_data_service
        self._signature_lookup_url = settings.signature_lookup_url
        self._prefix = prefix

    def type_name(self, base: str) -> str:
        """Entity-type name, prefixed when the network also hosts an SVM."""
        if base == "Contract":
            return base
        return f"{self._prefix}{base}"

    def _context(self, base: str) -> EntityContext:
        return EntityContext(network=self._network, entity_type_name=self.type_name(base))

    def _ref(self, base: str, field_name: str, value: str) -> AssociatedRef:
        return AssociatedRef(
            network_label=self._network,
            entity_type=self.type_name(base),
            field_name=field_name,
            field_value=value,
        )

    async def _call(self, method: str, params: list) -> object:
        return await self._client.rpc_call(self._endpoint, method, params)

    async def _receipt(self, tx_hash: str) -> EvmReceipt:
        return validate(EvmReceipt, await self._call("eth_getTransactionReceipt", [tx_hash]))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    async def get_block(self, key: str, value: str) -> Entity | None:
        """Fetch a block by decimal ``height`` or by ``hash``."""
        try:
            if key == "height":
                method, params = "eth_getBlockByNumber", [hex(int(value)), False]
            else:
                method, params = "eth_getBlockByHash", [_prefixed(value), False]
            block = validate(EvmBlock, await self._call(method, params))

            size = int(block.size, 16)
            fields = {
                "Height": convert_hex(block.number),
                "Timestamp": format_timestamp(int(block.timestamp, 16)),
                "Gas Used": convert_hex(block.gasUsed),
                "Gas Limit": convert_hex(block.gasLimit),
                "Size": f"{size} byte" if size == 1 else f"{size} bytes",
                "Fee Recipient": block.miner,
            }
        except Exception as e:
            log_lookup_failure(f"block by {key}", self._network, value, e)
            return None

        return Entity(
            unique_identifier=block.hash or value,
            unique_identifier_label="hash",
            metadata=build_metadata(fields),
            context=self._context("Block"),
            raw=dump(block),
        )

    async def block_transactions(self, entity: Entity) -> list[AssociatedRef]:
        try:
            block = validate_raw(EvmBlock, entity.raw)
        except Exception as e:
            log_lookup_failure("block transactions", self._network, entity.unique_identifier, e)
            return []
        return [self._ref("Transaction", "hash", tx) for tx in block.transactions]

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def get_transaction(self, tx_hash: str) -> Entity | None:
        """Transaction plus its receipt; status and gas used live in the receipt."""
        prefixed = _prefixed(tx_hash)
        try:
            tx = validate(
                EvmTransaction, await self._call("eth_getTransactionByHash", [prefixed])
            )
            receipt = await self._receipt(prefixed)
            gas_price = format_ether(int(tx.gasPrice, 16))
        except Exception as e:
            log_lookup_failure("transaction by hash", self._network, tx_hash, e)
            return None

        return Entity(
            unique_identifier=tx.hash,
            unique_identifier_label="hash",
            metadata=build_metadata(
                {
                    "Height": convert_hex(tx.blockNumber),
                    "From": tx.from_,
                    "To": tx.to,
                    "Gas Price": gas_price,
                    "Gas Used": receipt.gasUsed,
                    "Status": status(receipt.status),
                }
            ),
            context=self._context("Transaction"),
            raw=dump(tx),
        )

    async def transaction_logs(self, entity: Entity) -> list[AssociatedRef]:
        """Created contract (if any) followed by one Log reference per receipt log."""
        try:
            tx = validate_raw(EvmTransaction, entity.raw)
            receipt = await self._receipt(tx.hash)
        except Exception as e:
            log_lookup_failure("transaction logs", self._network, entity.unique_identifier, e)
            return []

        refs: list[AssociatedRef] = []
        if receipt.contractAddress:
            refs.append(self._ref("Log", "path", f"{tx.hash}/{receipt.contractAddress}"))
        refs.extend(
            self._ref("Log", "path", f"{tx.hash}/{index}")
            for index in range(len(receipt.logs))
        )
        return refs

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    async def _event_name(self, topic: str) -> str:
        """Best-effort event name; falls back to the topic hash."""
        url = f"{self._signature_lookup_url}?event={topic}&filter=true"
        try:
            response = await self._client.get(url)
            if not response.ok:
                raise BadResponseError(f"HTTP {response.status}", status=response.status)
            lookup = validate(SignatureLookup, response.data)
        except Exception as e:
            logger.debug("Signature lookup for %s failed: %s", topic, e)
            return topic

        entries = lookup.result.event.get(topic) or []
        return entries[0].name if entries else topic

    async def get_log(self, path: str) -> Entity | None:
        """Resolve ``<txHash>/<logIndex>`` or ``<txHash>/<createdContract>``."""
        tx_hash, _, target = path.partition("/")
        if not tx_hash or not target:
            return None

        try:
            receipt = await self._receipt(tx_hash)
        except Exception as e:
            log_lookup_failure("log by path", self._network, path, e)
            return None

        if is_evm_address(target):
            if not receipt.contractAddress:
                return None
            return Entity(
                unique_identifier=receipt.contractAddress,
                unique_identifier_label="address",
                metadata=build_metadata({"Event": "Contract Created"}),
                context=self._context("Contract"),
                raw=dump(EvmAddressRecord(address=receipt.contractAddress)),
            )

        if not (target.isascii() and target.isdigit()) or int(target) >= len(receipt.logs):
            logger.debug("No log %r in receipt of %s", target, tx_hash)
            return None

        log = receipt.logs[int(target)]
        name = await self._event_name(log.topics[0]) if log.topics else "Anonymous Event"
        return Entity(
            unique_identifier=name,
            unique_identifier_label="Event",
            metadata=build_metadata({"Topics": log.topics, "Data": log.data}),
            context=self._context("Log"),
            raw=dump(log),
        )

    # ------------------------------------------------------------------
    # Accounts / contracts
    # ------------------------------------------------------------------

    async def _address_entity(self, address: str, base: str) -> Entity | None:
        if not is_evm_address(address):
            return None
        try:
            result = await self._call("eth_getBalance", [address, "latest"])
            if not isinstance(result, str):
                raise BadResponseError(f"eth_getBalance returned {result!r}")
            balance = format_ether(int(result, 16))
        except Exception as e:
            log_lookup_failure(f"{base.lower()} by address", self._network, address, e)
            return None

        return Entity(
            unique_identifier=address,
            unique_identifier_label="address",
            metadata=build_metadata({"Balance": balance}),
            context=self._context(base),
            raw=dump(EvmAddressRecord(address=address)),
        )

    async def get_account(self, address: str) -> Entity | None:
        return await self._address_entity(address, "Account")

    async def get_contract(self, address: str) -> Entity | None:
        return await self._address_entity(address, "Contract")

    async def address_transactions(self, entity: Entity) -> list[AssociatedRef]:
        """History from the external chain-data service, when one is configured."""
        if not self._chain_data_service:
            return []

        url = f"{self._chain_data_service}/{self._provider}/{self._chain_id}"
        try:
            record = validate_raw(EvmAddressRecord, entity.raw)
            response = await self._client.post(
                url,
                {"method": "mc_getTransactionsByAddress", "params": [record.address]},
            )
            if not response.ok:
                raise BadResponseError(f"HTTP {response.status}", status=response.status)
            history = validate(ChainDataTransactions, response.data)
        except Exception as e:
            log_lookup_failure("address transactions", self._network, entity.unique_identifier, e)
            return []

        return [self._ref("Transaction", "hash", tx.hash) for tx in history.result.txs]
