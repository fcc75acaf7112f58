"""Structural validators for Tendermint / Cosmos SDK RPC responses."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..common import RpcEnvelope


class BlockId(BaseModel):
    hash: str


class BlockHeader(BaseModel):
    chain_id: str
    height: str
    time: str
    proposer_address: str


class BlockData(BaseModel):
    txs: list[str] = Field(default_factory=list)
    # Only present on data-availability chains.
    square_size: str | None = None

    @field_validator("txs", mode="before")
    @classmethod
    def _null_txs(cls, value: Any) -> Any:
        return [] if value is None else value


class BlockBody(BaseModel):
    header: BlockHeader
    data: BlockData


class CosmosBlock(BaseModel):
    """``result`` of ``/block`` and ``/block_by_hash``."""

    block_id: BlockId
    block: BlockBody


class EventAttribute(BaseModel):
    key: str
    value: str | None = None
    index: bool = False


class TxEvent(BaseModel):
    type: str
    attributes: list[EventAttribute] = Field(default_factory=list)


class TxResult(BaseModel):
    code: int
    gas_wanted: str
    gas_used: str
    log: str = ""
    codespace: str = ""
    events: list[TxEvent] = Field(default_factory=list)


class CosmosTx(BaseModel):
    """``result`` of ``/tx`` and one entry of ``/tx_search``."""

    hash: str
    height: str
    index: int
    tx_result: TxResult
    tx: str


class CosmosTxSearch(BaseModel):
    txs: list[CosmosTx]
    total_count: str


class AbciResponse(BaseModel):
    code: int = 0
    log: str = ""
    value: str | None = None
    height: str = "0"


class AbciQuery(BaseModel):
    response: AbciResponse


class CosmosAccount(BaseModel):
    """Canonical raw record of an Account entity."""

    address: str


class CosmosMessageRecord(BaseModel):
    """Canonical raw record of a Message entity."""

    transaction_hash: str
    index: int
    type_url: str
    value: str  # base64


BlockEnvelope = RpcEnvelope[CosmosBlock]
TxEnvelope = RpcEnvelope[CosmosTx]
TxSearchEnvelope = RpcEnvelope[CosmosTxSearch]
AbciEnvelope = RpcEnvelope[AbciQuery]
