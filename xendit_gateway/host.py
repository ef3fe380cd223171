"""Host platform collaborator used by the gateway adapter."""

from __future__ import annotations

from typing import Protocol

from flask import current_app

from .models import ContactNumber


class HostPlatform(Protocol):
    """What the billing platform must provide to the gateway."""

    callback_base_url: str
    company_id: str

    def get_phone_numbers(self, contact_id) -> list[str]:
        """Phone numbers for the contact, primary first."""


class FlaskHost:
    """HostPlatform backed by Flask config and the ContactNumber table."""

    def __init__(self, callback_base_url: str | None = None, company_id: str | None = None) -> None:
        self.callback_base_url = callback_base_url if callback_base_url is not None else (
            current_app.config.get('GW_CALLBACK_URL') or ''
        )
        self.company_id = company_id if company_id is not None else str(
            current_app.config.get('COMPANY_ID') or ''
        )

    def get_phone_numbers(self, contact_id) -> list[str]:
        if contact_id is None:
            return []
        rows = (
            ContactNumber.query.filter_by(contact_id=int(contact_id), type='phone')
            .order_by(ContactNumber.id.asc())
            .all()
        )
        return [row.number for row in rows]
