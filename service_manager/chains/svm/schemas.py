"""Structural validators for Solana JSON-RPC responses."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SvmReward(BaseModel):
    pubkey: str
    lamports: int
    postBalance: int
    rewardType: str | None = None
    commission: int | None = None


class SvmBlock(BaseModel):
    """``getBlock`` with ``transactionDetails: "signatures"``."""

    blockHeight: int | None
    blockTime: int | None
    blockhash: str
    parentSlot: int
    previousBlockhash: str
    signatures: list[str]
    rewards: list[SvmReward] = Field(default_factory=list)


class UiTokenAmount(BaseModel):
    amount: str
    decimals: int
    uiAmount: float | None = None
    uiAmountString: str


class SvmTokenBalance(BaseModel):
    accountIndex: int
    mint: str
    owner: str | None = None
    programId: str | None = None
    uiTokenAmount: UiTokenAmount


class SvmInstruction(BaseModel):
    programIdIndex: int
    accounts: list[int]
    data: str


class InnerInstructions(BaseModel):
    index: int
    instructions: list[SvmInstruction]


class ReturnData(BaseModel):
    programId: str
    data: Any


class LoadedAddresses(BaseModel):
    writable: list[str] = Field(default_factory=list)
    readonly: list[str] = Field(default_factory=list)


class TransactionMeta(BaseModel):
    err: Any = None
    fee: int
    innerInstructions: list[InnerInstructions] = Field(default_factory=list)
    postBalances: list[int]
    postTokenBalances: list[SvmTokenBalance] = Field(default_factory=list)
    preBalances: list[int]
    preTokenBalances: list[SvmTokenBalance] = Field(default_factory=list)
    rewards: list[SvmReward] = Field(default_factory=list)
    logMessages: list[str] | None = None
    returnData: ReturnData | None = None
    loadedAddresses: LoadedAddresses | None = None
    computeUnitsConsumed: int | None = None


class MessageHeader(BaseModel):
    numReadonlySignedAccounts: int
    numReadonlyUnsignedAccounts: int
    numRequiredSignatures: int


class SvmMessage(BaseModel):
    accountKeys: list[str]
    header: MessageHeader
    instructions: list[SvmInstruction]
    recentBlockhash: str


class SvmTransactionBody(BaseModel):
    message: SvmMessage
    signatures: list[str]


class SvmTransaction(BaseModel):
    """``getTransaction`` (json encoding)."""

    blockTime: int | None
    meta: TransactionMeta
    slot: int
    transaction: SvmTransactionBody
    version: int | str | None = None
