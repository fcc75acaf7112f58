"""Tendermint / Cosmos SDK adapter: blocks, txs, messages and accounts."""
from __future__ import annotations

import asyncio
import base64
import logging
import re
from decimal import Decimal

from ...config import CosmosNetworkConfig
from ...errors import BadResponseError
from ...interfaces.transport import Transport
from ...metadata import build_metadata, status
from ...models import AssociatedRef, Entity, EntityContext
from ...rpc.client import JsonResponse
from ..common import log_lookup_failure, validate, validate_raw
from . import codec
from .schemas import (
    AbciEnvelope,
    BlockEnvelope,
    CosmosAccount,
    CosmosBlock,
    CosmosMessageRecord,
    CosmosTx,
    TxEnvelope,
    TxSearchEnvelope,
)

logger = logging.getLogger(__name__)

BALANCE_QUERY_PATH = "/cosmos.bank.v1beta1.Query/Balance"
# Bank balances are reported in micro-denom units.
BALANCE_SCALE = Decimal(10**6)


class CosmosAdapter:
    """Resolve Cosmos entities against one Tendermint RPC endpoint."""

    def __init__(self, client: Transport, config: CosmosNetworkConfig) -> None:
        self._client = client
        self._base = config.rpc
        self._network = config.label
        self._account = config.account
        self._per_page = config.tx_search_per_page

    @property
    def network_name(self) -> str:
        return self._network

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_ok(self, url: str) -> JsonResponse:
        response = await self._client.get(url)
        if not response.ok:
            raise BadResponseError(
                f"Response code {response.status}",
                status=response.status,
                network=self._network,
            )
        return response

    def _search_url(self, condition: str) -> str:
        url = f'{self._base}/tx_search?query="{condition}"'
        if self._per_page:
            # Whole history in a single response; no further paging.
            url += f'&prove=false&page=1&per_page={self._per_page}&order_by="asc"'
        return url

    def _context(self, entity_type: str) -> EntityContext:
        return EntityContext(network=self._network, entity_type_name=entity_type)

    def _tx_entity(self, tx: CosmosTx) -> Entity:
        result = tx.tx_result
        return Entity(
            unique_identifier=tx.hash,
            unique_identifier_label="Hash",
            metadata=build_metadata(
                {
                    "Height": tx.height,
                    "Index": str(tx.index),
                    "Status": status(not result.code),
                    "Gas (used/wanted)": f"{result.gas_used}/{result.gas_wanted}",
                }
            ),
            context=self._context("Transaction"),
            raw=tx.model_dump_json(),
        )

    def _message_entity(self, record: CosmosMessageRecord, value: bytes) -> Entity:
        fields: dict[str, object] = {
            "Type": record.type_url,
            "Transaction": record.transaction_hash,
            "Index": record.index,
        }
        if record.type_url == codec.MSG_SEND_TYPE_URL:
            try:
                send = codec.decode_msg_send(value)
                fields["From"] = send.from_address
                fields["To"] = send.to_address
                fields["Amount"] = codec.format_coins(send.amount)
            except ValueError as e:
                logger.debug("Could not decode MsgSend in %s: %s", record.transaction_hash, e)

        return Entity(
            unique_identifier=f"{record.transaction_hash}/{record.index}",
            unique_identifier_label="Path",
            metadata=build_metadata(fields),
            context=self._context("Message"),
            raw=record.model_dump_json(),
        )

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    async def get_block(self, query_type: str, value: str) -> Entity | None:
        """Fetch a block by ``height`` or ``hash``."""
        base_url = (
            f"{self._base}/block?height="
            if query_type == "height"
            else f"{self._base}/block_by_hash?hash="
        )
        try:
            response = await self._get_ok(base_url + value.upper())
            block = validate(BlockEnvelope, response.data).result
        except Exception as e:
            log_lookup_failure(f"block by {query_type}", self._network, value, e)
            return None

        header = block.block.header
        fields: dict[str, object] = {
            "Chain Id": header.chain_id,
            "Height": header.height,
            "Time": header.time,
        }
        # Data-availability chains report their square size; others don't.
        if block.block.data.square_size is not None:
            fields["Square Size"] = block.block.data.square_size
        fields["Proposer"] = header.proposer_address

        return Entity(
            unique_identifier=block.block_id.hash,
            unique_identifier_label="Hash",
            metadata=build_metadata(fields),
            context=self._context("Block"),
            raw=block.model_dump_json(),
        )

    async def block_transactions(self, entity: Entity) -> list[AssociatedRef]:
        """One Transaction reference per raw tx carried in the block."""
        try:
            block = validate_raw(CosmosBlock, entity.raw)
            return [
                AssociatedRef(
                    network_label=self._network,
                    entity_type="Transaction",
                    field_name="hash",
                    field_value=codec.tx_hash(tx),
                )
                for tx in block.block.data.txs
            ]
        except Exception as e:
            log_lookup_failure("block transactions", self._network, entity.unique_identifier, e)
            return []

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def _fetch_tx(self, tx_hash: str) -> CosmosTx:
        response = await self._get_ok(f"{self._base}/tx?hash={tx_hash.upper()}")
        return validate(TxEnvelope, response.data).result

    async def get_transaction(self, tx_hash: str) -> Entity | None:
        try:
            tx = await self._fetch_tx(tx_hash)
        except Exception as e:
            log_lookup_failure("transaction by hash", self._network, tx_hash, e)
            return None
        return self._tx_entity(tx)

    async def get_transactions_by_height(self, height: str) -> list[Entity]:
        try:
            response = await self._get_ok(self._search_url(f"tx.height={height}"))
            search = validate(TxSearchEnvelope, response.data).result
        except Exception as e:
            log_lookup_failure("transactions by height", self._network, height, e)
            return []
        return [self._tx_entity(tx) for tx in search.txs]

    async def transaction_messages(self, entity: Entity) -> list[AssociatedRef]:
        """One Message reference (``<hash>/<index>``) per message in the tx."""
        try:
            tx = validate_raw(CosmosTx, entity.raw)
            messages = codec.decode_messages(tx.tx)
        except Exception as e:
            log_lookup_failure("transaction messages", self._network, entity.unique_identifier, e)
            return []

        return [
            AssociatedRef(
                network_label=self._network,
                entity_type="Message",
                field_name="path",
                field_value=f"{entity.unique_identifier}/{index}",
            )
            for index in range(len(messages))
        ]

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def get_message(self, path: str) -> Entity | None:
        """Resolve ``<transactionHash>/<index>`` to the index-th message."""
        tx_hash, _, index_text = path.partition("/")
        if not tx_hash or not (index_text.isascii() and index_text.isdigit()):
            logger.debug("Malformed message path %r", path)
            return None
        index = int(index_text)

        try:
            tx = await self._fetch_tx(tx_hash)
            messages = codec.decode_messages(tx.tx)
        except Exception as e:
            log_lookup_failure("message by path", self._network, path, e)
            return None

        if index >= len(messages):
            logger.debug("Message %d out of range for %s (%d)", index, tx_hash, len(messages))
            return None

        message = messages[index]
        record = CosmosMessageRecord(
            transaction_hash=tx.hash,
            index=index,
            type_url=message.type_url,
            value=base64.b64encode(message.value).decode("ascii"),
        )
        return self._message_entity(record, message.value)

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    async def get_account(self, address: str) -> Entity | None:
        """Native-denom spendable balance via an ABCI bank query."""
        account = self._account
        if account is None or not re.match(account.address_pattern, address):
            return None

        data = codec.balance_query_data(address, account.denom)
        url = f'{self._base}/abci_query?path="{BALANCE_QUERY_PATH}"&data=0x{data}'
        try:
            response = await self._get_ok(url)
            query = validate(AbciEnvelope, response.data).result
            amount = codec.parse_balance(query.response.value)
        except Exception as e:
            log_lookup_failure("account balance", self._network, address, e)
            return None

        if not (amount.isascii() and amount.isdigit()):
            amount = "0"
        balance = (Decimal(amount) / BALANCE_SCALE).normalize()

        return Entity(
            unique_identifier=address,
            unique_identifier_label="Address",
            metadata=build_metadata(
                {"Spendable": f"{balance:f} {account.display_denom}"}
            ),
            context=self._context("Account"),
            raw=CosmosAccount(address=address).model_dump_json(),
        )

    async def get_transactions_by_address(self, address: str) -> list[AssociatedRef]:
        """Sent and received history, newest first.

        Both searches run concurrently. Only the "sent" search's HTTP status
        is checked; a failing "received" search surfaces only if its body
        does not validate.
        """
        try:
            sent, received = await asyncio.gather(
                self._client.get(self._search_url(f"message.sender='{address}'")),
                self._client.get(self._search_url(f"transfer.recipient='{address}'")),
            )
            if not sent.ok:
                raise BadResponseError(
                    f"Response code {sent.status}", status=sent.status, network=self._network
                )
            sent_txs = validate(TxSearchEnvelope, sent.data).result.txs
            received_txs = validate(TxSearchEnvelope, received.data).result.txs
            merged = sorted(
                [*sent_txs, *received_txs], key=lambda tx: int(tx.height), reverse=True
            )
        except Exception as e:
            log_lookup_failure("transactions by address", self._network, address, e)
            return []

        return [
            AssociatedRef(
                network_label=self._network,
                entity_type="Transaction",
                field_name="hash",
                field_value=tx.hash,
            )
            for tx in merged
        ]

    async def account_transactions(self, entity: Entity) -> list[AssociatedRef]:
        try:
            account = validate_raw(CosmosAccount, entity.raw)
        except Exception as e:
            log_lookup_failure("account transactions", self._network, entity.unique_identifier, e)
            return []
        return await self.get_transactions_by_address(account.address)
