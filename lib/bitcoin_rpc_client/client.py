from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from .config_types import ClientConfig, RetryPolicy
from .transport import RpcRequest, RpcResult, Transport
from .types import (
    Address,
    AddressInfoResult,
    AddressValidationResult,
    Block,
    BlockchainInfo,
    BlockHash,
    BlockHeight,
    DecodedRawTransaction,
    DecodedScript,
    FundingOptions,
    FundingResult,
    MultiSigAddress,
    NewTransactionInput,
    NewTransactionOutput,
    PrivateKey,
    Script,
    SerializedRawTransaction,
    SigHashType,
    SigningResult,
    TransactionId,
    TransactionOutputDetail,
    UnspentTransactionOutput,
    VerboseBlock,
    VerboseRawTransaction,
)

logger = logging.getLogger(__name__)

# Bitcoin Core: "Client still warming up" (loading block index, verifying blocks...)
RPC_IN_WARMUP = -28

DEFAULT_RETRY = RetryPolicy()


class BitcoinCoreClient:
    def __init__(self, cfg: ClientConfig, *, http_transport: httpx.BaseTransport | None = None):
        self._retry = cfg.retry
        self._t = Transport(cfg, http_transport=http_transport)

    @classmethod
    def from_credentials(
            cls,
            url: str,
            username: str,
            password: str,
            *,
            retry: RetryPolicy | None = DEFAULT_RETRY,
            timeout_s: float = 15.0,
            http_transport: httpx.BaseTransport | None = None,
    ) -> BitcoinCoreClient:
        cfg = ClientConfig(
            base_url=url,
            username=username,
            password=password,
            timeout_s=timeout_s,
            retry=retry,
        )
        return cls(cfg, http_transport=http_transport)

    @property
    def retry(self) -> RetryPolicy | None:
        return self._retry

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> BitcoinCoreClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def call(self, method: str, *params: Any, response_type: Any = Any) -> RpcResult[Any]:
        """Send one RPC and decode its result as ``response_type``.

        Transport failures raise a ``TransportError`` and are never retried.
        While the node reports ``RPC_IN_WARMUP`` the request is repeated up to
        ``retry.max_retries`` times, sleeping ``retry.interval_s`` in between;
        a final attempt is then made and its result returned as is.
        """
        request = RpcRequest(method, params)
        retry = self._retry
        if retry is not None:
            for attempt in range(retry.max_retries):
                result = self._t.send(request, response_type)
                if result.error is None or result.error.code != RPC_IN_WARMUP:
                    return result
                logger.info(
                    "Bitcoind is still starting up. Request will be retried in %s seconds. (%d/%d)",
                    retry.interval_s,
                    attempt + 1,
                    retry.max_retries,
                )
                time.sleep(retry.interval_s)
            if retry.max_retries:
                logger.debug("%s: retries exhausted, making final attempt", method)
        return self._t.send(request, response_type)

    # --- RPC methods, ordered as in the Bitcoin Core developer reference ---
    def add_multisig_address(
            self,
            number_of_required_signatures: int,
            participants: list[Address],
    ) -> RpcResult[MultiSigAddress]:
        return self.call(
            "addmultisigaddress",
            number_of_required_signatures,
            participants,
            response_type=MultiSigAddress,
        )

    def create_raw_transaction(
            self,
            inputs: list[NewTransactionInput],
            output: NewTransactionOutput,
    ) -> RpcResult[SerializedRawTransaction]:
        return self.call("createrawtransaction", inputs, output, response_type=SerializedRawTransaction)

    def decode_raw_transaction(self, tx: SerializedRawTransaction) -> RpcResult[DecodedRawTransaction]:
        return self.call("decoderawtransaction", tx, response_type=DecodedRawTransaction)

    def decode_script(self, script: Script) -> RpcResult[DecodedScript]:
        return self.call("decodescript", script, response_type=DecodedScript)

    def dump_privkey(self, address: Address) -> RpcResult[PrivateKey]:
        return self.call("dumpprivkey", address, response_type=PrivateKey)

    def fund_raw_transaction(
            self,
            tx: SerializedRawTransaction,
            options: FundingOptions,
    ) -> RpcResult[FundingResult]:
        return self.call("fundrawtransaction", tx, options, response_type=FundingResult)

    def generate(self, number_of_blocks: int) -> RpcResult[list[BlockHash]]:
        return self.call("generate", number_of_blocks, response_type=list[BlockHash])

    def generate_to_address(self, number_of_blocks: int, address: Address) -> RpcResult[list[BlockHash]]:
        return self.call("generatetoaddress", number_of_blocks, address, response_type=list[BlockHash])

    def get_address_info(self, address: Address) -> RpcResult[AddressInfoResult]:
        return self.call("getaddressinfo", address, response_type=AddressInfoResult)

    def get_balance(self) -> RpcResult[float]:
        return self.call("getbalance", response_type=float)

    def get_best_block_hash(self) -> RpcResult[BlockHash]:
        return self.call("getbestblockhash", response_type=BlockHash)

    def get_block(self, header_hash: BlockHash) -> RpcResult[Block]:
        return self.call("getblock", header_hash, response_type=Block)

    def get_block_verbose(self, header_hash: BlockHash) -> RpcResult[VerboseBlock]:
        return self.call("getblock", header_hash, 2, response_type=VerboseBlock)

    def get_blockchain_info(self) -> RpcResult[BlockchainInfo]:
        return self.call("getblockchaininfo", response_type=BlockchainInfo)

    def get_block_count(self) -> RpcResult[BlockHeight]:
        return self.call("getblockcount", response_type=BlockHeight)

    def get_block_hash(self, height: int) -> RpcResult[BlockHash]:
        return self.call("getblockhash", height, response_type=BlockHash)

    def get_new_address(self) -> RpcResult[Address]:
        return self.call("getnewaddress", "", "bech32", response_type=Address)

    def get_raw_transaction_serialized(self, tx: TransactionId) -> RpcResult[SerializedRawTransaction]:
        return self.call("getrawtransaction", tx, False, response_type=SerializedRawTransaction)

    def get_raw_transaction_verbose(self, tx: TransactionId) -> RpcResult[VerboseRawTransaction]:
        return self.call("getrawtransaction", tx, True, response_type=VerboseRawTransaction)

    def list_unspent(
            self,
            min_confirmations: int,
            max_confirmations: int | None = None,
            recipients: list[Address] | None = None,
    ) -> RpcResult[list[UnspentTransactionOutput]]:
        return self.call(
            "listunspent",
            min_confirmations,
            max_confirmations,
            recipients,
            response_type=list[UnspentTransactionOutput],
        )

    def send_raw_transaction(self, tx_data: SerializedRawTransaction) -> RpcResult[TransactionId]:
        return self.call("sendrawtransaction", tx_data, response_type=TransactionId)

    def send_to_address(self, address: Address, amount: float) -> RpcResult[TransactionId]:
        return self.call("sendtoaddress", address, amount, response_type=TransactionId)

    def sign_raw_transaction_with_key(
            self,
            tx: SerializedRawTransaction,
            private_keys: list[PrivateKey] | None = None,
            dependencies: list[TransactionOutputDetail] | None = None,
            signature_hash_type: SigHashType | None = None,
    ) -> RpcResult[SigningResult]:
        return self.call(
            "signrawtransactionwithkey",
            tx,
            private_keys,
            dependencies,
            signature_hash_type,
            response_type=SigningResult,
        )

    def validate_address(self, address: Address) -> RpcResult[AddressValidationResult]:
        return self.call("validateaddress", address, response_type=AddressValidationResult)
