"""Payload types exchanged with a Bitcoin Core node.

Addresses, hashes, scripts and serialized transactions are passed through as
strings; the client never interprets them. Structured results are frozen
pydantic models that ignore keys they do not know about, so newer node
versions keep decoding.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Address = str
BlockHash = str
TransactionId = str
SerializedRawTransaction = str
PrivateKey = str
Script = str
BlockHeight = int

NewTransactionOutput = dict[Address, float]

# listunspent min_confirmations value that includes mempool outputs
UNCONFIRMED = 0


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SigHashType(str, Enum):
    ALL = "ALL"
    NONE = "NONE"
    SINGLE = "SINGLE"
    ALL_ANYONECANPAY = "ALL|ANYONECANPAY"
    NONE_ANYONECANPAY = "NONE|ANYONECANPAY"
    SINGLE_ANYONECANPAY = "SINGLE|ANYONECANPAY"


class MultiSigAddress(_Model):
    address: Address
    redeem_script: str = Field(alias="redeemScript")
    descriptor: str | None = None


class ScriptSig(_Model):
    asm: str
    hex: str


class ScriptPubKey(_Model):
    asm: str
    hex: str
    type: str
    req_sigs: int | None = Field(default=None, alias="reqSigs")
    address: Address | None = None
    addresses: list[Address] | None = None


class TransactionInput(_Model):
    txid: TransactionId | None = None
    vout: int | None = None
    coinbase: str | None = None
    script_sig: ScriptSig | None = Field(default=None, alias="scriptSig")
    txinwitness: list[str] | None = None
    sequence: int


class TransactionOutput(_Model):
    value: float
    n: int
    script_pub_key: ScriptPubKey = Field(alias="scriptPubKey")


class DecodedRawTransaction(_Model):
    txid: TransactionId
    hash: str
    version: int
    size: int
    vsize: int
    weight: int | None = None
    locktime: int
    vin: list[TransactionInput]
    vout: list[TransactionOutput]


class VerboseRawTransaction(DecodedRawTransaction):
    hex: SerializedRawTransaction
    blockhash: BlockHash | None = None
    confirmations: int | None = None
    time: int | None = None
    blocktime: int | None = None


class DecodedScript(_Model):
    asm: str
    hex: str | None = None
    type: str
    req_sigs: int | None = Field(default=None, alias="reqSigs")
    addresses: list[Address] | None = None
    p2sh: Address | None = None
    segwit: dict[str, Any] | None = None


class FundingOptions(_Model):
    change_address: Address | None = Field(default=None, alias="changeAddress")
    change_position: int | None = Field(default=None, alias="changePosition")
    change_type: str | None = None
    include_watching: bool | None = Field(default=None, alias="includeWatching")
    lock_unspents: bool | None = Field(default=None, alias="lockUnspents")
    fee_rate: float | None = Field(default=None, alias="feeRate")
    subtract_fee_from_outputs: list[int] | None = Field(default=None, alias="subtractFeeFromOutputs")
    replaceable: bool | None = None
    conf_target: int | None = None
    estimate_mode: str | None = None


class FundingResult(_Model):
    hex: SerializedRawTransaction
    fee: float
    changepos: int


class _BlockHeader(_Model):
    hash: BlockHash
    confirmations: int
    size: int
    strippedsize: int | None = None
    weight: int | None = None
    height: BlockHeight
    version: int
    version_hex: str | None = Field(default=None, alias="versionHex")
    merkleroot: str
    time: int
    mediantime: int | None = None
    nonce: int
    bits: str
    difficulty: float
    chainwork: str
    n_tx: int | None = Field(default=None, alias="nTx")
    previousblockhash: BlockHash | None = None
    nextblockhash: BlockHash | None = None


class Block(_BlockHeader):
    tx: list[TransactionId]


class VerboseBlock(_BlockHeader):
    tx: list[DecodedRawTransaction]


class BlockchainInfo(_Model):
    chain: str
    blocks: BlockHeight
    headers: int
    bestblockhash: BlockHash
    difficulty: float
    mediantime: int
    verificationprogress: float
    initialblockdownload: bool | None = None
    chainwork: str
    size_on_disk: int | None = None
    pruned: bool
    warnings: str | list[str] | None = None


class AddressInfoResult(_Model):
    address: Address
    script_pub_key: str = Field(alias="scriptPubKey")
    ismine: bool
    iswatchonly: bool
    solvable: bool | None = None
    isscript: bool
    iswitness: bool
    witness_version: int | None = None
    witness_program: str | None = None
    pubkey: str | None = None
    iscompressed: bool | None = None
    ischange: bool | None = None
    hdkeypath: str | None = None
    hdseedid: str | None = None
    labels: list[Any] | None = None


class UnspentTransactionOutput(_Model):
    txid: TransactionId
    vout: int
    address: Address | None = None
    label: str | None = None
    script_pub_key: str = Field(alias="scriptPubKey")
    redeem_script: str | None = Field(default=None, alias="redeemScript")
    amount: float
    confirmations: int
    spendable: bool
    solvable: bool
    safe: bool | None = None
    desc: str | None = None


class NewTransactionInput(_Model):
    txid: TransactionId
    vout: int
    sequence: int | None = None


class TransactionOutputDetail(_Model):
    txid: TransactionId
    vout: int
    script_pub_key: str = Field(alias="scriptPubKey")
    redeem_script: str | None = Field(default=None, alias="redeemScript")
    witness_script: str | None = Field(default=None, alias="witnessScript")
    amount: float | None = None


class SigningError(_Model):
    txid: TransactionId
    vout: int
    script_sig: str = Field(alias="scriptSig")
    sequence: int
    error: str


class SigningResult(_Model):
    hex: SerializedRawTransaction
    complete: bool
    errors: list[SigningError] | None = None


class AddressValidationResult(_Model):
    isvalid: bool
    address: Address | None = None
    script_pub_key: str | None = Field(default=None, alias="scriptPubKey")
    isscript: bool | None = None
    iswitness: bool | None = None
    witness_version: int | None = None
    witness_program: str | None = None
