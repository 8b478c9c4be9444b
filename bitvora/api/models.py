"""
Request and response models for the Bitvora API.

Every response shares the ``{status, message, data}`` envelope; only the
type of ``data`` differs per endpoint. All models are frozen and strict:
a body whose field types do not match is rejected, never coerced.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

Metadata = Dict[str, str]


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)


class _Envelope(_Model):
    status: NonNegativeInt
    message: str


# Requests

class WithdrawRequest(_Model):
    amount: float
    currency: str
    destination: str
    metadata: Metadata = Field(default_factory=dict)


class EstimateWithdrawalRequest(_Model):
    amount: float
    currency: str
    destination: str


class CreateLightningInvoiceRequest(_Model):
    amount: float
    currency: str
    description: str
    expiry_seconds: NonNegativeInt
    metadata: Optional[Metadata] = None


class CreateLightningAddressRequest(_Model):
    handle: str
    domain: str
    metadata: Optional[Metadata] = None


class CreateOnChainAddressRequest(_Model):
    metadata: Optional[Metadata] = None


# Lightning routing detail as reported by the provider's LND node.
# Passed through untouched, so unknown keys are kept and every field is
# optional.

class _LNDModel(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="allow")


class LNDChannelUpdate(_LNDModel):
    signature: Optional[str] = None
    chain_hash: Optional[str] = None
    chan_id: Optional[str] = None
    timestamp: Optional[int] = None
    message_flags: Optional[int] = None
    channel_flags: Optional[int] = None
    time_lock_delta: Optional[int] = None
    htlc_minimum_msat: Optional[str] = None
    base_fee: Optional[int] = None
    fee_rate: Optional[int] = None
    htlc_maximum_msat: Optional[str] = None
    extra_opaque_data: Optional[str] = None


class LNDPaymentFailure(_LNDModel):
    code: Optional[str] = None
    channel_update: Optional[LNDChannelUpdate] = None
    htlc_msat: Optional[str] = None
    onion_sha_256: Optional[str] = None
    cltv_expiry: Optional[int] = None
    flags: Optional[int] = None
    failure_source_index: Optional[int] = None
    height: Optional[int] = None


class LNDHop(_LNDModel):
    chan_id: Optional[str] = None
    chan_capacity: Optional[str] = None
    amt_to_forward: Optional[str] = None
    expiry: Optional[int] = None


class LNDPaymentRoute(_LNDModel):
    total_time_lock: Optional[int] = None
    total_fees: Optional[str] = None
    total_fees_msat: Optional[str] = None
    total_amt: Optional[str] = None
    hops: List[LNDHop] = Field(default_factory=list)


class LNDHTLCAttempt(_LNDModel):
    attempt_id: Optional[str] = None
    status: Optional[str] = None
    route: Optional[LNDPaymentRoute] = None
    attempt_time_ns: Optional[str] = None
    resolve_time_ns: Optional[str] = None
    failure: Optional[LNDPaymentFailure] = None
    preimage: Optional[str] = None


class LNDTrackPaymentResponse(_LNDModel):
    payment_hash: Optional[str] = None
    value: Optional[str] = None
    creation_date: Optional[str] = None
    fee: Optional[str] = None
    payment_preimage: Optional[str] = None
    value_sat: Optional[str] = None
    value_msat: Optional[str] = None
    payment_request: Optional[str] = None
    status: Optional[str] = None
    fee_sat: Optional[str] = None
    fee_msat: Optional[str] = None
    creation_time_ns: Optional[str] = None
    htlcs: List[LNDHTLCAttempt] = Field(default_factory=list)
    payment_index: Optional[str] = None
    failure_reason: Optional[str] = None


# Response payloads

class WithdrawData(_Model):
    id: str
    amount_sats: NonNegativeInt
    recipient: str
    fee_sats: float
    network_type: str
    rail_type: str
    status: str
    lightning_payment: Optional[LNDTrackPaymentResponse] = None
    chain_tx_id: Optional[str] = None
    metadata: Optional[Metadata] = None
    created_at: str


class EstimateWithdrawalData(_Model):
    recipient: str
    recipient_type: str
    amount_sats: NonNegativeInt
    bitvora_fee_sats: float
    success_probability: float


class CreateLightningInvoiceData(_Model):
    id: str
    node_id: str
    memo: str
    r_preimage: str
    r_hash: str
    amount_sats: NonNegativeInt
    settled: bool
    payment_request: str
    metadata: Optional[Metadata] = None
    lightning_address_id: Optional[str] = None


class CreateLightningAddressData(_Model):
    id: str
    handle: str
    domain: str
    address: str
    metadata: Optional[Metadata] = None
    created_at: str
    last_used_at: Optional[str] = None
    deleted_at: Optional[str] = None


class CreateOnChainAddressData(_Model):
    id: str
    address: str
    metadata: Optional[Metadata] = None
    created_at: str


class GetDepositData(_Model):
    id: str
    ledger_tx_id: str
    recipient: str
    amount_sats: NonNegativeInt
    fee_sats: float
    chain_tx_id: Optional[str] = None
    rail_type: str
    network_type: str
    status: str
    metadata: Optional[Metadata] = None
    lightning_invoice_id: Optional[str] = None
    created_at: str


class GetBalanceData(_Model):
    balance: NonNegativeInt


class Transaction(_Model):
    id: str
    company_id: str
    amount_sats: NonNegativeInt
    recipient: str
    rail_type: str
    type: str
    fee_microsats: NonNegativeInt
    status: str
    created_at: str


# Envelopes

class WithdrawResponse(_Envelope):
    data: WithdrawData


class EstimateWithdrawalResponse(_Envelope):
    data: EstimateWithdrawalData


class CreateLightningInvoiceResponse(_Envelope):
    data: CreateLightningInvoiceData


class CreateLightningAddressResponse(_Envelope):
    data: CreateLightningAddressData


class CreateOnChainAddressResponse(_Envelope):
    data: CreateOnChainAddressData


class GetDepositResponse(_Envelope):
    data: GetDepositData


class GetBalanceResponse(_Envelope):
    data: GetBalanceData


class GetTransactionsResponse(_Envelope):
    data: List[Transaction]
