#!/usr/bin/env python3
"""
Xendit API key checker that reads XENDIT_API_KEY from .env and runs the
same live balance lookup the settings form uses.

Usage:
  python scripts/check_xendit_key.py
"""
from dotenv import load_dotenv
import os

from xendit_gateway.client import XenditClient, XenditError

load_dotenv()

API_KEY = (os.getenv("XENDIT_API_KEY") or "").strip()
API_URL = os.getenv("XENDIT_API_URL")


def main():
    if not API_KEY:
        print("No XENDIT_API_KEY found in .env. Please add it.")
        raise SystemExit(2)
    masked = API_KEY[:6] + '...' + API_KEY[-4:] if len(API_KEY) > 10 else '****'
    print(f"Checking Xendit key: {masked}")
    try:
        balance = XenditClient(API_KEY, API_URL).get_balance('CASH', 'IDR')
    except XenditError as e:
        print("Key check failed:", e)
        raise SystemExit(1)
    if balance.balance is None:
        print("Unexpected balance response; key is not usable.")
        raise SystemExit(1)
    print("Key is valid, CASH balance (IDR):", balance.balance)


if __name__ == "__main__":
    main()
