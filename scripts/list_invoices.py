#!/usr/bin/env python
"""List recent Xendit invoices with their decoded invoice allocations.

Usage:
  python scripts/list_invoices.py --status PAID --limit 20
"""
from __future__ import annotations
import argparse
import os
import sys

from dotenv import load_dotenv

from xendit_gateway.client import XenditClient, XenditError
from xendit_gateway.invoices import decode_external_id

load_dotenv()


def format_invoice(inv) -> str:
    allocations = ', '.join(f'{a.id}={a.amount}' for a in decode_external_id(inv.external_id)) or '-'
    return f"  - {inv.id} status={inv.status} amount={inv.amount} paid={inv.paid_amount} invoices=[{allocations}]"


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description='List Xendit invoices')
    parser.add_argument('--status', action='append', help='Filter by status (repeatable), e.g. PAID, SETTLED, PENDING')
    parser.add_argument('--limit', type=int, default=10, help='Maximum number of invoices to fetch')
    args = parser.parse_args(argv)

    api_key = (os.environ.get('XENDIT_API_KEY') or '').strip()
    if not api_key:
        print('Missing XENDIT_API_KEY; cannot query Xendit.')
        return 2
    filters: dict = {'limit': args.limit}
    if args.status:
        filters['statuses'] = args.status
    client = XenditClient(api_key, os.environ.get('XENDIT_API_URL'))
    try:
        invoices = client.get_invoice_list(filters)
    except XenditError as e:
        print(f'Invoice list failed: {e}')
        return 1
    print(f'=== {len(invoices)} invoice(s) ===')
    for inv in invoices:
        print(format_invoice(inv))
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
