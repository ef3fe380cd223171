"""Thin Xendit REST client.

Xendit API reference: https://developers.xendit.co/api-reference/

Every call is attempted once; failures surface as XenditError subclasses.
"""
import logging

import requests
from pydantic import ValidationError

from .schemas import Balance, Invoice

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.xendit.co'


class XenditError(Exception):
    pass


class XenditAPIError(XenditError):
    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class XenditConnectionError(XenditError):
    pass


class XenditDecodeError(XenditError):
    pass


def _parse(model, payload):
    try:
        return model.model_validate(payload)
    except ValidationError as err:
        raise XenditDecodeError(f'Unexpected Xendit payload for {model.__name__}: {err}') from err


class XenditClient:
    def __init__(self, api_key: str, api_url: str | None = None):
        self.api_key = api_key
        self.api_url = (api_url or DEFAULT_API_URL).rstrip('/')

    def _request(self, path: str, method: str = 'GET', params: dict | None = None, data: dict | None = None):
        url = f'{self.api_url}{path}'
        headers = {'Content-Type': 'application/json', 'Accept': 'application/json'}
        try:
            resp = requests.request(
                method,
                url,
                params=params,
                json=data,
                headers=headers,
                auth=(self.api_key, ''),
            )
            resp.raise_for_status()
        except requests.HTTPError as http_err:
            body = resp.text[:1000] if resp.text else None
            logger.warning('Xendit HTTPError method=%s path=%s status=%s', method, path, resp.status_code)
            raise XenditAPIError(
                f'Xendit {method} {path} HTTPError status={resp.status_code} body={body}',
                status_code=resp.status_code,
                body=body,
            ) from http_err
        except requests.RequestException as req_err:
            raise XenditConnectionError(f'Xendit {method} {path} network error: {req_err}') from req_err
        try:
            return resp.json()
        except ValueError as decode_err:
            raise XenditDecodeError(f'Xendit {method} {path} returned non-JSON body') from decode_err

    def create_invoice(self, params: dict) -> Invoice:
        return _parse(Invoice, self._request('/v2/invoices', method='POST', data=params))

    def get_invoice(self, external_id: str) -> list[Invoice]:
        """Look up invoices by external id. Xendit answers with a list."""
        payload = self._request('/v2/invoices/', params={'external_id': external_id})
        if isinstance(payload, dict):
            payload = [payload]
        return [_parse(Invoice, item) for item in payload or []]

    def get_invoice_list(self, filters: dict | None = None) -> list[Invoice]:
        payload = self._request('/v2/invoices', params=filters or {})
        return [_parse(Invoice, item) for item in payload or []]

    def get_balance(self, account_type: str = 'CASH', currency: str = 'IDR') -> Balance:
        payload = self._request('/balance', params={'account_type': account_type, 'currency': currency})
        return _parse(Balance, payload)
