from __future__ import annotations

import os
from typing import Any

import bcrypt

ROLE_CUSTOMER = "customer"
ROLE_ADMIN = "admin"

_accounts: dict[str, dict[str, Any]] = {}


def _hash(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def register_account(username: str, password: str, role: str = ROLE_CUSTOMER) -> None:
    _accounts[username] = {"password_hash": _hash(password), "role": role}


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Check credentials. Returns the session payload ``{username, role}`` or ``None``."""
    account = _accounts.get(username)
    if account is None:
        return None
    if not bcrypt.checkpw(password.encode(), account["password_hash"].encode()):
        return None
    return {"username": username, "role": account["role"]}


def _seed_accounts() -> None:
    """Demo accounts; override the passwords through the environment."""
    register_account("customer", os.getenv("DEMO_CUSTOMER_PASSWORD", "customer123"), ROLE_CUSTOMER)
    register_account("admin", os.getenv("DEMO_ADMIN_PASSWORD", "admin123"), ROLE_ADMIN)


_seed_accounts()
