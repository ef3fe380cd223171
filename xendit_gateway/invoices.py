"""Invoice allocation encoding carried through Xendit's external_id."""
import base64
import binascii
from typing import Iterable, List, NamedTuple


class InvoiceAllocation(NamedTuple):
    id: str
    amount: str


def _as_pair(item) -> tuple:
    if isinstance(item, dict):
        return item['id'], item['amount']
    return item[0], item[1]


def serialize_invoices(invoices: Iterable) -> str:
    """Serialize invoice allocations as ``id1=amount1|id2=amount2``.

    Ids must not contain ``|`` or ``=``; nothing is escaped.
    """
    parts = []
    for item in invoices or []:
        inv_id, amount = _as_pair(item)
        parts.append(f'{inv_id}={amount}')
    return '|'.join(parts)


def unserialize_invoices(blob: str) -> List[InvoiceAllocation]:
    invoices = []
    if not blob:
        return invoices
    for pair in blob.split('|'):
        pieces = pair.split('=', 1)
        if len(pieces) != 2:
            continue
        invoices.append(InvoiceAllocation(pieces[0], pieces[1]))
    return invoices


def encode_external_id(invoices: Iterable) -> str:
    return base64.b64encode(serialize_invoices(invoices).encode('utf-8')).decode('ascii')


def decode_external_id(external_id: str | None) -> List[InvoiceAllocation]:
    if not external_id:
        return []
    try:
        blob = base64.b64decode(external_id).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return []
    return unserialize_invoices(blob)
