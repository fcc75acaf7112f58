"""Shared test fixtures and sample data."""
from __future__ import annotations

import base64
import textwrap
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from service_manager.chains.cosmos.codec import encode_length_delimited
from service_manager.config import (
    AccountConfig,
    CosmosNetworkConfig,
    RemoteEndpoints,
    RemoteNetworkConfig,
    SettingsConfig,
)

DYM_ADDRESS = "dym1" + "q" * 38
RECIPIENT = "dym1" + "p" * 38
EVM_ADDRESS = "0x" + "ab" * 20
CONTRACT_ADDRESS = "0x" + "cd" * 20
EVM_TX_HASH = "0x" + "11" * 32
EVM_BLOCK_HASH = "0x" + "22" * 32
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_settings() -> SettingsConfig:
    return SettingsConfig(
        rpc_timeout=10,
        add_network_endpoint="https://networks.example.com",
        evm_chain_data_service="https://chain-data.example.com",
        signature_lookup_url="https://signatures.example.com/lookup",
    )


@pytest.fixture()
def cosmos_config() -> CosmosNetworkConfig:
    return CosmosNetworkConfig(
        label="dymension-hub",
        rpc="https://rpc.dymension.example.com",
        account=AccountConfig(
            denom="udym", display_denom="DYM", address_pattern=r"^dym\w{39}$"
        ),
    )


@pytest.fixture()
def evm_network() -> RemoteNetworkConfig:
    return RemoteNetworkConfig(
        provider="eclipse",
        name="Ethereum",
        id="ethereum",
        endpoints=RemoteEndpoints(evm="https://evm.example.com"),
    )


@pytest.fixture()
def svm_network() -> RemoteNetworkConfig:
    return RemoteNetworkConfig(
        provider="eclipse",
        name="Solana",
        id="solana",
        endpoints=RemoteEndpoints(svm="https://svm.example.com"),
    )


@pytest.fixture()
def mock_client() -> AsyncMock:
    """Stand-in for RpcClient; set ``get`` / ``post`` / ``rpc_call`` per test."""
    return AsyncMock()


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    settings:
      rpc_timeout: 15
      add_network_endpoint: "https://networks.example.com/"
      evm_chain_data_service: ""
    cosmos_networks:
      - label: celestia-mocha
        rpc: "https://rpc.celestia.example.com/"
      - label: dymension-hub
        rpc: "https://rpc.dymension.example.com"
        tx_search_per_page: 10000
        account:
          denom: udym
          display_denom: DYM
          address_pattern: "^dym\\\\w{39}$"
    remote_networks:
      - provider: eclipse
        name: Ethereum
        id: ethereum
        endpoints:
          evm: "https://evm.example.com"
      - provider: eclipse
        name: Solana
        id: solana
        endpoints:
          svm: ""
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Cosmos sample data
# ---------------------------------------------------------------------------


def _any(type_url: str, value: bytes) -> bytes:
    return encode_length_delimited(1, type_url.encode()) + encode_length_delimited(2, value)


def _msg_send(from_address: str, to_address: str, denom: str, amount: str) -> bytes:
    coin = encode_length_delimited(1, denom.encode()) + encode_length_delimited(
        2, amount.encode()
    )
    return (
        encode_length_delimited(1, from_address.encode())
        + encode_length_delimited(2, to_address.encode())
        + encode_length_delimited(3, coin)
    )


def _make_tx(*messages: tuple[str, bytes]) -> str:
    """Base64 TxRaw whose body carries ``messages`` as (type_url, value) pairs."""
    body = b"".join(encode_length_delimited(1, _any(url, value)) for url, value in messages)
    body += encode_length_delimited(2, b"memo")
    raw = (
        encode_length_delimited(1, body)
        + encode_length_delimited(2, b"auth-info")
        + encode_length_delimited(3, b"signature")
    )
    return base64.b64encode(raw).decode("ascii")


@pytest.fixture()
def make_tx() -> Callable[..., str]:
    return _make_tx


@pytest.fixture()
def msg_send() -> Callable[..., bytes]:
    return _msg_send


@pytest.fixture()
def send_tx() -> str:
    """Transaction with a MsgSend followed by a non-bank message."""
    return _make_tx(
        ("/cosmos.bank.v1beta1.MsgSend", _msg_send(DYM_ADDRESS, RECIPIENT, "udym", "1000")),
        ("/ibc.core.client.v1.MsgUpdateClient", b"\x0a\x02ok"),
    )


def _cosmos_tx(tx_hash: str, height: int, tx: str, code: int = 0, index: int = 0) -> dict:
    return {
        "hash": tx_hash,
        "height": str(height),
        "index": index,
        "tx_result": {
            "code": code,
            "data": "",
            "log": "",
            "info": "",
            "gas_wanted": "200000",
            "gas_used": "85000",
            "events": [
                {"type": "tx", "attributes": [{"key": "fee", "value": "20udym", "index": True}]}
            ],
            "codespace": "",
        },
        "tx": tx,
    }


@pytest.fixture()
def cosmos_tx() -> Callable[..., dict]:
    return _cosmos_tx


@pytest.fixture()
def cosmos_block_payload(make_tx: Callable[..., str]) -> dict:
    return {
        "jsonrpc": "2.0",
        "id": -1,
        "result": {
            "block_id": {"hash": "B10CKHASH", "parts": {"total": 1, "hash": "PARTS"}},
            "block": {
                "header": {
                    "version": {"block": "11"},
                    "chain_id": "dymension_1100-1",
                    "height": "100",
                    "time": "2024-01-01T00:00:00Z",
                    "proposer_address": "PROPOSER",
                },
                "data": {
                    "txs": [
                        make_tx(("/a.MsgOne", b"")),
                        make_tx(("/a.MsgTwo", b"")),
                        make_tx(("/a.MsgThree", b"")),
                    ],
                    "square_size": "4",
                },
                "evidence": {"evidence": []},
                "last_commit": None,
            },
        },
    }


# ---------------------------------------------------------------------------
# EVM sample data
# ---------------------------------------------------------------------------


@pytest.fixture()
def evm_block() -> dict:
    return {
        "baseFeePerGas": "0x7",
        "difficulty": "0x0",
        "extraData": "0x",
        "gasLimit": "0x1c9c380",
        "gasUsed": "0xe4e1c0",
        "hash": EVM_BLOCK_HASH,
        "logsBloom": "0x00",
        "miner": "0x95222290dd7278aa3ddd389cc1e1d165cc4bafe5",
        "mixHash": "0x" + "33" * 32,
        "nonce": "0x0000000000000000",
        "number": "0x10d4f",
        "parentHash": "0x" + "44" * 32,
        "receiptsRoot": "0x" + "55" * 32,
        "sha3Uncles": "0x" + "66" * 32,
        "size": "0x220",
        "stateRoot": "0x" + "77" * 32,
        "timestamp": "0x641061c0",
        "transactions": [EVM_TX_HASH, "0x" + "12" * 32],
        "transactionsRoot": "0x" + "88" * 32,
        "uncles": [],
        "withdrawals": [],
    }


@pytest.fixture()
def evm_transaction() -> dict:
    return {
        "blockHash": EVM_BLOCK_HASH,
        "blockNumber": "0x10d4f",
        "from": EVM_ADDRESS,
        "gas": "0x5208",
        "gasPrice": "0x4a817c800",
        "hash": EVM_TX_HASH,
        "input": "0x",
        "nonce": "0x1",
        "to": "0x" + "ef" * 20,
        "transactionIndex": "0x0",
        "value": "0xde0b6b3a7640000",
        "type": "0x2",
        "chainId": "0x1",
        "v": "0x1",
        "r": "0x" + "99" * 32,
        "s": "0x" + "aa" * 32,
    }


def _evm_log(index: int, topics: list[str]) -> dict:
    return {
        "address": CONTRACT_ADDRESS,
        "topics": topics,
        "data": "0x" + "00" * 31 + "01",
        "blockNumber": "0x10d4f",
        "transactionHash": EVM_TX_HASH,
        "transactionIndex": "0x0",
        "blockHash": EVM_BLOCK_HASH,
        "logIndex": hex(index),
        "removed": False,
    }


@pytest.fixture()
def evm_receipt() -> dict:
    return {
        "transactionHash": EVM_TX_HASH,
        "transactionIndex": "0x0",
        "type": "0x2",
        "blockHash": EVM_BLOCK_HASH,
        "blockNumber": "0x10d4f",
        "from": EVM_ADDRESS,
        "to": "0x" + "ef" * 20,
        "gasUsed": "0x5208",
        "cumulativeGasUsed": "0x5208",
        "effectiveGasPrice": "0x4a817c800",
        "contractAddress": None,
        "logs": [_evm_log(0, [TRANSFER_TOPIC]), _evm_log(1, [])],
        "status": "0x1",
        "logsBloom": "0x00",
    }


# ---------------------------------------------------------------------------
# SVM sample data
# ---------------------------------------------------------------------------


@pytest.fixture()
def svm_block() -> dict:
    return {
        "blockHeight": 250000000,
        "blockTime": 1678795200,
        "blockhash": "BLOCKHASH111",
        "parentSlot": 269999999,
        "previousBlockhash": "BLOCKHASH000",
        "signatures": ["SIG_A", "SIG_B"],
        "rewards": [
            {
                "pubkey": "VALIDATOR",
                "lamports": 5000,
                "postBalance": 1000000,
                "rewardType": "Fee",
                "commission": None,
            }
        ],
    }


@pytest.fixture()
def svm_transaction() -> dict:
    return {
        "blockTime": 1678795200,
        "meta": {
            "err": None,
            "fee": 5000,
            "innerInstructions": [],
            "postBalances": [999995000, 1],
            "postTokenBalances": [],
            "preBalances": [1000000000, 1],
            "preTokenBalances": [],
            "rewards": [],
            "logMessages": ["Program 11111111111111111111111111111111 invoke [1]"],
            "status": {"Ok": None},
            "loadedAddresses": {"writable": [], "readonly": []},
            "computeUnitsConsumed": 150,
        },
        "slot": 270000000,
        "transaction": {
            "message": {
                "accountKeys": ["FEEPAYER", "11111111111111111111111111111111"],
                "header": {
                    "numReadonlySignedAccounts": 0,
                    "numReadonlyUnsignedAccounts": 1,
                    "numRequiredSignatures": 1,
                },
                "instructions": [{"programIdIndex": 1, "accounts": [0], "data": "3Bxs4"}],
                "recentBlockhash": "BLOCKHASH000",
            },
            "signatures": ["SIG_A"],
        },
        "version": 0,
    }
