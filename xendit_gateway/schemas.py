"""Typed views over Xendit responses and the normalized transaction record."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .invoices import InvoiceAllocation

TransactionStatus = Literal['approved', 'declined', 'pending', 'void', 'refunded']


class Invoice(BaseModel):
    """A Xendit hosted invoice. Fields Xendit omits stay ``None``."""

    model_config = ConfigDict(extra='allow')

    id: str | None = None
    external_id: str | None = None
    status: str | None = None
    amount: Decimal | None = None
    paid_amount: Decimal | None = None
    payment_id: str | None = None
    invoice_url: str | None = None
    success_redirect_url: str | None = None
    failure_redirect_url: str | None = None
    currency: str | None = None


class Balance(BaseModel):
    model_config = ConfigDict(extra='allow')

    balance: Decimal | None = None


class GatewaySettings(BaseModel):
    api_key: str = Field(default='', repr=False)


class TransactionResult(BaseModel):
    client_id: str | None = None
    amount: Decimal | None = None
    currency: str = 'IDR'
    invoices: list[InvoiceAllocation] | None = None
    status: TransactionStatus
    reference_id: str | None = None
    transaction_id: str | None = None
    parent_transaction_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'client_id': self.client_id,
            'amount': format(self.amount.normalize(), 'f') if self.amount is not None else None,
            'currency': self.currency,
            'invoices': (
                [inv._asdict() for inv in self.invoices] if self.invoices is not None else None
            ),
            'status': self.status,
            'reference_id': self.reference_id,
            'transaction_id': self.transaction_id,
            'parent_transaction_id': self.parent_transaction_id,
        }
