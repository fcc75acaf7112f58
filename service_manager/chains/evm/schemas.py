"""Structural validators for Ethereum JSON-RPC responses."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..common import Quantity


class EvmBlock(BaseModel):
    """``eth_getBlockByNumber`` / ``eth_getBlockByHash`` with hashes only."""

    difficulty: str
    extraData: str
    gasLimit: str
    gasUsed: str
    hash: str | None
    logsBloom: str | None
    miner: str
    mixHash: str
    nonce: str | None
    number: str | None
    parentHash: str
    receiptsRoot: str
    sha3Uncles: str
    size: str
    stateRoot: str
    timestamp: str
    # Dropped by post-merge clients.
    totalDifficulty: str | None = None
    transactions: list[str]
    transactionsRoot: str
    uncles: list[str]


class EvmTransaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    blockHash: str | None
    blockNumber: str | None
    from_: str = Field(alias="from")
    gas: str
    gasPrice: str
    hash: str
    input: str
    nonce: str
    to: str | None
    transactionIndex: str | None
    value: str
    type: str
    chainId: str | None = None
    v: str
    r: str
    s: str


class EvmLog(BaseModel):
    address: str
    topics: list[str]
    data: str
    blockNumber: Quantity
    transactionHash: str
    transactionIndex: Quantity
    blockHash: str
    logIndex: Quantity
    removed: bool


class EvmReceipt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transactionHash: str
    transactionIndex: Quantity
    type: Quantity
    blockHash: str
    blockNumber: Quantity
    from_: str = Field(alias="from")
    to: str | None
    gasUsed: Quantity
    cumulativeGasUsed: Quantity
    contractAddress: str | None
    logs: list[EvmLog]
    status: Quantity
    logsBloom: str


class EvmAddressRecord(BaseModel):
    """Canonical raw record of Account / Contract entities."""

    address: str


class SignatureEntry(BaseModel):
    name: str
    filtered: bool = False


class SignatureResult(BaseModel):
    event: dict[str, list[SignatureEntry] | None] = Field(default_factory=dict)


class SignatureLookup(BaseModel):
    """Reply of the signature-database ``lookup`` endpoint."""

    ok: bool = True
    result: SignatureResult


class ChainDataTx(BaseModel):
    hash: str


class ChainDataTxs(BaseModel):
    txs: list[ChainDataTx]


class ChainDataTransactions(BaseModel):
    """Reply of the chain-data service's ``mc_getTransactionsByAddress``."""

    result: ChainDataTxs


def dump(record: BaseModel) -> str:
    """Serialize a record with its upstream field names."""
    return record.model_dump_json(by_alias=True)
