"""Xendit non-merchant gateway.

Builds a hosted Xendit invoice for a payment attempt and reconciles the
browser return / webhook push back into a TransactionResult.

Fee policy: a fixed 3% admin fee is added on top of the charged amount at
initiation and backed out of ``paid_amount`` at reconciliation. Both sides
use FEE_RATE.
"""
import json
import re
from decimal import ROUND_HALF_UP, Decimal

from flask import current_app, render_template
from pydantic import ValidationError

from . import lang
from .client import XenditClient, XenditError
from .invoices import decode_external_id, encode_external_id
from .models import GatewayLog, db
from .schemas import GatewaySettings, Invoice, TransactionResult

CURRENCY = 'IDR'
FEE_RATE = Decimal('0.03')
INVOICE_DURATION = 86400  # seconds

_STATUS_MAP = {
    'settled': 'approved',
    'paid': 'approved',
    'pending': 'pending',
}


class GatewayError(Exception):
    pass


class GatewaySetupError(GatewayError):
    """Xendit could not be reached or refused the request; the flow is aborted."""


class UnsupportedOperationError(GatewayError):
    def __init__(self, message: str = lang.UNSUPPORTED):
        super().__init__(message)


def round_amount(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def add_fee(amount: Decimal) -> tuple[Decimal, Decimal]:
    """Return (fee, total charged). The fee is not re-rounded."""
    fee = amount * FEE_RATE
    return fee, amount + fee


def remove_fee(paid_amount: Decimal) -> Decimal:
    return paid_amount - paid_amount * FEE_RATE


def map_status(raw: str) -> str:
    return _STATUS_MAP.get(raw.lower(), 'declined')


def client_id_from_redirect(url: str | None) -> str | None:
    """Pull ``client_id`` out of the redirect URL Xendit echoes back."""
    if not url or 'client_id=' not in url:
        return None
    return url.split('client_id=', 1)[1].split('&')[0]


def _first_invoice_id(invoice_amounts):
    if not invoice_amounts:
        return None
    first = invoice_amounts[0]
    if isinstance(first, dict):
        return first.get('id')
    return first[0]


def _concat(sep: str, *parts) -> str:
    return sep.join(str(p) for p in parts if p)


class XenditGateway:
    name = lang.NAME
    description = lang.DESCRIPTION

    def __init__(self, settings: GatewaySettings, host, client_factory=XenditClient, api_url: str | None = None):
        self.settings = settings
        self.host = host
        self.client_factory = client_factory
        self.api_url = api_url
        self.currency = CURRENCY

    def _client(self, api_key: str | None = None):
        return self.client_factory(api_key if api_key is not None else self.settings.api_key, self.api_url)

    @staticmethod
    def encryptable_fields() -> list[str]:
        return ['api_key']

    def validate_settings(self, meta: dict) -> dict[str, str]:
        """Return field errors for the settings form; empty when valid."""
        api_key = (meta.get('api_key') or '').strip()
        if not api_key:
            return {'api_key': lang.ERROR_API_KEY_EMPTY}
        try:
            balance = self._client(api_key).get_balance('CASH', CURRENCY)
            valid = balance.balance is not None
        except Exception as e:  # noqa: BLE001
            current_app.logger.info('Xendit API key live check failed: %s', e)
            valid = False
        if not valid:
            return {'api_key': lang.ERROR_API_KEY_VALID}
        return {}

    def build_params(self, contact_info: dict, amount, invoice_amounts=None, options: dict | None = None) -> dict:
        options = dict(options or {})
        amount = round_amount(amount)
        recur = options.get('recur')
        if recur and recur.get('amount') is not None:
            # Xendit invoices do not recur; only normalized here.
            options['recur'] = dict(recur, amount=round_amount(recur['amount']))

        numbers = self.host.get_phone_numbers(contact_info.get('id'))
        address = {
            'city': contact_info.get('city'),
            'country': (contact_info.get('country') or {}).get('name'),
            'postal_code': contact_info.get('zip'),
            'state': (contact_info.get('state') or {}).get('name'),
            'street': _concat(' ', contact_info.get('address1'), contact_info.get('address2')),
        }
        customer = {
            'given_names': contact_info.get('first_name'),
            'surname': contact_info.get('last_name'),
            'addresses': [address],
        }
        if numbers:
            customer['mobile_number'] = re.sub(r'[^0-9]', '', numbers[0])

        fee, total = add_fee(amount)
        # Xendit reconciles through the callback; both redirects point back to the same page.
        redirect_url = f"{options.get('return_url') or ''}&invoice_id={_first_invoice_id(invoice_amounts) or ''}"
        return {
            'external_id': encode_external_id(invoice_amounts or []),
            'amount': float(total),
            'description': options.get('description') or 'Payment',
            'invoice_duration': INVOICE_DURATION,
            'customer': customer,
            'client_type': 'INTEGRATION',
            'platform_callback_url': (
                f"{self.host.callback_base_url}{self.host.company_id}/xendit/"
                f"?client_id={contact_info.get('client_id') or ''}"
            ),
            'success_redirect_url': redirect_url,
            'failure_redirect_url': redirect_url,
            'currency': self.currency,
            'fees': [{'type': 'ADMIN', 'value': float(fee)}],
        }

    def build_process(self, contact_info: dict, amount, invoice_amounts=None, options: dict | None = None) -> str:
        """Create the hosted invoice and return the Xendit payment page URL."""
        params = self.build_params(contact_info, amount, invoice_amounts, options)
        try:
            invoice = self._client().create_invoice(params)
        except XenditError as e:
            current_app.logger.exception('Xendit invoice create failed external_id=%s', params['external_id'])
            raise GatewaySetupError(str(e)) from e
        if not invoice.invoice_url:
            current_app.logger.error('Xendit response missing invoice_url external_id=%s', params['external_id'])
            raise GatewaySetupError('Xendit response missing invoice_url')
        current_app.logger.info(
            'Xendit invoice created external_id=%s amount=%s url=%s',
            params['external_id'], params['amount'], invoice.invoice_url,
        )
        return invoice.invoice_url

    def render_process(self, contact_info: dict, amount, invoice_amounts=None, options: dict | None = None) -> str:
        post_to = self.build_process(contact_info, amount, invoice_amounts, options)
        return render_template('xendit/process.html', post_to=post_to, submit_label=lang.SUBMIT)

    def _lookup(self, invoice_id) -> list[Invoice]:
        try:
            return self._client().get_invoice(invoice_id)
        except XenditError as e:
            current_app.logger.exception('Xendit invoice lookup failed invoice_id=%s', invoice_id)
            raise GatewaySetupError(str(e)) from e

    def validate(self, get: dict, body: dict | None = None) -> TransactionResult | None:
        """Reconcile a webhook push (JSON body) or a browser return (query string)."""
        if body and body.get('external_id'):
            try:
                transaction = Invoice.model_validate(body)
            except ValidationError as e:
                current_app.logger.warning('Malformed Xendit webhook external_id=%s err=%s', body.get('external_id'), e)
                _record('webhook', body.get('external_id'), body)
                return None
        else:
            invoice_id = get.get('invoice_id')
            if not invoice_id:
                current_app.logger.warning('Xendit browser return without invoice_id args=%s', get)
                _record('validate', None, get)
                return None
            results = self._lookup(invoice_id)
            if not results:
                current_app.logger.info('Xendit lookup found nothing to reconcile invoice_id=%s', invoice_id)
                _record('validate', invoice_id, [])
                return None
            transaction = results[0]

        if transaction.status is None:
            current_app.logger.warning('Xendit transaction without status id=%s', transaction.id)
            _record('validate', transaction.external_id, transaction.model_dump(mode='json'))
            return None

        amount = remove_fee(transaction.paid_amount) if transaction.paid_amount is not None else None
        return TransactionResult(
            client_id=client_id_from_redirect(transaction.success_redirect_url),
            amount=amount,
            currency=self.currency,
            invoices=decode_external_id(transaction.external_id),
            status=map_status(transaction.status),
            reference_id=transaction.id,
            transaction_id=transaction.payment_id,
            parent_transaction_id=None,
        )

    def success(self, get: dict, post: dict | None = None) -> TransactionResult | None:
        """Browser-return summary. Reports the gross amount and no allocations."""
        invoice_id = get.get('invoice_id')
        if not invoice_id:
            current_app.logger.warning('Xendit success return without invoice_id args=%s', get)
            _record('success', None, get)
            return None
        results = self._lookup(invoice_id)
        _record('success', invoice_id, [r.model_dump(mode='json') for r in results])
        if not results or results[0].status is None:
            return None
        transaction = results[0]
        return TransactionResult(
            client_id=get.get('client_id'),
            amount=transaction.amount,
            currency=self.currency,
            invoices=None,
            status=map_status(transaction.status),
            transaction_id=transaction.id,
            parent_transaction_id=None,
        )

    def refund(self, reference_id, transaction_id, amount, notes=None):
        raise UnsupportedOperationError()

    def void(self, reference_id, transaction_id, notes=None):
        raise UnsupportedOperationError()


def _record(source: str, external_id, payload) -> None:
    try:
        entry = GatewayLog(
            source=source,
            external_id=str(external_id) if external_id is not None else None,
            payload_json=json.dumps(payload, default=str)[:5000],
        )
        db.session.add(entry)
        db.session.commit()
    except Exception as e:  # noqa: BLE001
        db.session.rollback()
        current_app.logger.warning('Failed to persist GatewayLog source=%s external_id=%s err=%s', source, external_id, e)
