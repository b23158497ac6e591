from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .transport import RpcResult
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


@runtime_checkable
class BitcoinRpcApi(Protocol):
    """Typed surface of a Bitcoin Core node. ``BitcoinCoreClient`` implements it."""

    def call(self, method: str, *params: Any, response_type: Any = Any) -> RpcResult[Any]: ...

    def add_multisig_address(
            self, number_of_required_signatures: int, participants: list[Address]
    ) -> RpcResult[MultiSigAddress]: ...

    def create_raw_transaction(
            self, inputs: list[NewTransactionInput], output: NewTransactionOutput
    ) -> RpcResult[SerializedRawTransaction]: ...

    def decode_raw_transaction(self, tx: SerializedRawTransaction) -> RpcResult[DecodedRawTransaction]: ...

    def decode_script(self, script: Script) -> RpcResult[DecodedScript]: ...

    def dump_privkey(self, address: Address) -> RpcResult[PrivateKey]: ...

    def fund_raw_transaction(
            self, tx: SerializedRawTransaction, options: FundingOptions
    ) -> RpcResult[FundingResult]: ...

    def generate(self, number_of_blocks: int) -> RpcResult[list[BlockHash]]: ...

    def generate_to_address(self, number_of_blocks: int, address: Address) -> RpcResult[list[BlockHash]]: ...

    def get_address_info(self, address: Address) -> RpcResult[AddressInfoResult]: ...

    def get_balance(self) -> RpcResult[float]: ...

    def get_best_block_hash(self) -> RpcResult[BlockHash]: ...

    def get_block(self, header_hash: BlockHash) -> RpcResult[Block]: ...

    def get_block_verbose(self, header_hash: BlockHash) -> RpcResult[VerboseBlock]: ...

    def get_blockchain_info(self) -> RpcResult[BlockchainInfo]: ...

    def get_block_count(self) -> RpcResult[BlockHeight]: ...

    def get_block_hash(self, height: int) -> RpcResult[BlockHash]: ...

    def get_new_address(self) -> RpcResult[Address]: ...

    def get_raw_transaction_serialized(self, tx: TransactionId) -> RpcResult[SerializedRawTransaction]: ...

    def get_raw_transaction_verbose(self, tx: TransactionId) -> RpcResult[VerboseRawTransaction]: ...

    def list_unspent(
            self,
            min_confirmations: int,
            max_confirmations: int | None = None,
            recipients: list[Address] | None = None,
    ) -> RpcResult[list[UnspentTransactionOutput]]: ...

    def send_raw_transaction(self, tx_data: SerializedRawTransaction) -> RpcResult[TransactionId]: ...

    def send_to_address(self, address: Address, amount: float) -> RpcResult[TransactionId]: ...

    def sign_raw_transaction_with_key(
            self,
            tx: SerializedRawTransaction,
            private_keys: list[PrivateKey] | None = None,
            dependencies: list[TransactionOutputDetail] | None = None,
            signature_hash_type: SigHashType | None = None,
    ) -> RpcResult[SigningResult]: ...

    def validate_address(self, address: Address) -> RpcResult[AddressValidationResult]: ...
