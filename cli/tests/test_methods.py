from __future__ import annotations

import pytest
from pydantic_core import to_jsonable_python

from bitcoin_rpc_client import BitcoinCoreClient, BitcoinRpcApi
from bitcoin_rpc_client.types import (
    Block,
    BlockchainInfo,
    DecodedRawTransaction,
    SigningResult,
    UnspentTransactionOutput,
    VerboseBlock,
    VerboseRawTransaction,
)

from fakes import FakeNode, rpc_ok
from payloads import ADAPTER_CASES, ADDRESS, BLOCK, BLOCK_HASH, BLOCKCHAIN_INFO, DECODED_TX, TXID, UTXO


@pytest.mark.parametrize("invoke,method,params,node_result", ADAPTER_CASES)
def test_adapter_sends_method_and_params(invoke, method, params, node_result) -> None:
    node = FakeNode(rpc_ok(node_result))

    result = invoke(node.client())

    assert result.ok
    assert node.payloads()[0]["method"] == method
    assert node.payloads()[0]["params"] == params


def test_client_satisfies_api_protocol() -> None:
    client = BitcoinCoreClient.from_credentials("http://127.0.0.1:8332", "u", "p")
    try:
        assert isinstance(client, BitcoinRpcApi)
    finally:
        client.close()


def test_decoded_transaction_round_trips_node_payload() -> None:
    node = FakeNode(rpc_ok(DECODED_TX))

    tx = node.client().decode_raw_transaction("0200").unwrap()

    assert isinstance(tx, DecodedRawTransaction)
    assert tx.vout[0].script_pub_key.address == ADDRESS
    assert tx.vin[0].script_sig.hex == ""
    assert to_jsonable_python(tx, by_alias=True, exclude_none=True) == DECODED_TX


def test_block_and_verbose_block_decode() -> None:
    node = FakeNode(rpc_ok(BLOCK), rpc_ok({**BLOCK, "tx": [DECODED_TX]}))
    client = node.client()

    block = client.get_block(BLOCK_HASH).unwrap()
    verbose = client.get_block_verbose(BLOCK_HASH).unwrap()

    assert isinstance(block, Block)
    assert block.tx == [TXID]
    assert block.n_tx == 1
    assert isinstance(verbose, VerboseBlock)
    assert verbose.tx[0].txid == TXID


def test_unknown_fields_are_ignored() -> None:
    node = FakeNode(rpc_ok(BLOCKCHAIN_INFO))

    info = node.client().get_blockchain_info().unwrap()

    assert isinstance(info, BlockchainInfo)
    assert info.chain == "regtest"
    assert info.verificationprogress == 1.0
    assert not hasattr(info, "softforks")


def test_verbose_transaction_and_utxos_decode() -> None:
    node = FakeNode(
        rpc_ok({**DECODED_TX, "hex": "0200", "confirmations": 3}),
        rpc_ok([UTXO]),
    )
    client = node.client()

    tx = client.get_raw_transaction_verbose(TXID).unwrap()
    utxos = client.list_unspent(1).unwrap()

    assert isinstance(tx, VerboseRawTransaction)
    assert tx.hex == "0200"
    assert tx.blockhash is None
    assert utxos == [UnspentTransactionOutput.model_validate(UTXO)]
    assert utxos[0].amount == 50.0


def test_signing_result_with_errors() -> None:
    node = FakeNode(
        rpc_ok(
            {
                "hex": "0200",
                "complete": False,
                "errors": [
                    {"txid": TXID, "vout": 0, "scriptSig": "", "sequence": 4294967295, "error": "Input not found"}
                ],
            }
        )
    )

    signed = node.client().sign_raw_transaction_with_key("0200").unwrap()

    assert isinstance(signed, SigningResult)
    assert not signed.complete
    assert signed.errors[0].error == "Input not found"
