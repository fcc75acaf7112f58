"""Unit tests for the upstream response validators."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from service_manager.chains.common import (
    format_timestamp,
    is_evm_address,
    parse_quantity,
    validate,
    validate_raw,
)
from service_manager.chains.cosmos.schemas import BlockEnvelope, CosmosBlock, CosmosTx
from service_manager.chains.evm.schemas import EvmReceipt, EvmTransaction, dump
from service_manager.chains.svm.schemas import SvmBlock, SvmTransaction
from service_manager.errors import SchemaValidationError


class TestQuantity:
    @pytest.mark.parametrize("value,expected", [("0x1a", 26), ("26", 26), (26, 26), ("0x0", 0)])
    def test_parse(self, value: object, expected: int) -> None:
        assert parse_quantity(value) == expected

    def test_receipt_accepts_hex(self, evm_receipt: dict) -> None:
        receipt = EvmReceipt.model_validate(evm_receipt)
        assert receipt.status == 1
        assert receipt.gasUsed == 21000
        assert [log.logIndex for log in receipt.logs] == [0, 1]


class TestCommon:
    def test_format_timestamp(self) -> None:
        assert format_timestamp(1678795200) == "Tue, 14 Mar 2023 12:00:00 UTC"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0x" + "ab" * 20, True),
            ("0x" + "AB" * 20, True),
            ("0x" + "ab" * 19, False),
            ("0x" + "ab" * 20 + "\n", False),
            ("0x" + "zz" * 20, False),
            ("ab" * 21, False),
        ],
    )
    def test_is_evm_address(self, value: str, expected: bool) -> None:
        assert is_evm_address(value) is expected

    def test_validate_wraps_pydantic_error(self) -> None:
        with pytest.raises(SchemaValidationError) as exc_info:
            validate(CosmosTx, {"hash": "A"})
        assert isinstance(exc_info.value.__cause__, ValidationError)
        assert exc_info.value.context["errors"]

    def test_validate_raw_rejects_garbage(self) -> None:
        with pytest.raises(SchemaValidationError):
            validate_raw(SvmBlock, "not json")


class TestCosmosSchemas:
    def test_block_envelope(self, cosmos_block_payload: dict) -> None:
        block = validate(BlockEnvelope, cosmos_block_payload).result
        assert block.block_id.hash == "B10CKHASH"
        assert block.block.data.square_size == "4"
        assert len(block.block.data.txs) == 3

    def test_null_txs_become_empty(self, cosmos_block_payload: dict) -> None:
        data = cosmos_block_payload["result"]
        data["block"]["data"] = {"txs": None}
        block = CosmosBlock.model_validate(data)
        assert block.block.data.txs == []
        assert block.block.data.square_size is None

    def test_envelope_requires_result(self) -> None:
        with pytest.raises(SchemaValidationError):
            validate(BlockEnvelope, {"jsonrpc": "2.0", "id": -1})

    def test_block_raw_round_trips(self, cosmos_block_payload: dict) -> None:
        block = CosmosBlock.model_validate(cosmos_block_payload["result"])
        assert validate_raw(CosmosBlock, block.model_dump_json()) == block


class TestEvmSchemas:
    def test_from_alias(self, evm_transaction: dict) -> None:
        tx = EvmTransaction.model_validate(evm_transaction)
        assert tx.from_ == evm_transaction["from"]
        assert '"from"' in dump(tx)
        assert validate_raw(EvmTransaction, dump(tx)) == tx

    def test_missing_field_fails(self, evm_transaction: dict) -> None:
        del evm_transaction["gasPrice"]
        with pytest.raises(SchemaValidationError):
            validate(EvmTransaction, evm_transaction)


class TestSvmSchemas:
    def test_transaction(self, svm_transaction: dict) -> None:
        tx = SvmTransaction.model_validate(svm_transaction)
        assert tx.meta.err is None
        assert tx.transaction.message.accountKeys[0] == "FEEPAYER"

    def test_transaction_without_meta_fails(self, svm_transaction: dict) -> None:
        del svm_transaction["meta"]
        with pytest.raises(SchemaValidationError):
            validate(SvmTransaction, svm_transaction)

    def test_block_extra_fields_ignored(self, svm_block: dict) -> None:
        svm_block["unexpected"] = 1
        assert SvmBlock.model_validate(svm_block).signatures == ["SIG_A", "SIG_B"]
