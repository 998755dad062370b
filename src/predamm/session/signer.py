"""Wallet capability consumed by the session, and a simulated wallet."""

from __future__ import annotations

import random
from typing import Protocol

import structlog

log = structlog.get_logger(__name__)

MIN_MOCK_BALANCE = 1000
MAX_MOCK_BALANCE = 6000


class Signer(Protocol):
    """Minimal wallet view: whether trades may be submitted and what they can spend."""

    @property
    def is_connected(self) -> bool: ...
    @property
    def address(self) -> str | None: ...
    @property
    def balance(self) -> float: ...


class MockSigner:
    """Simulated wallet: random 0x address and a random balance in [1000, 6000) on connect."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._address: str | None = None
        self._balance = 0.0

    @property
    def is_connected(self) -> bool:
        return self._address is not None

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def balance(self) -> float:
        return self._balance

    def connect(self) -> str:
        self._address = "0x" + format(self._rng.getrandbits(160), "040x")
        self._balance = float(self._rng.randrange(MIN_MOCK_BALANCE, MAX_MOCK_BALANCE))
        log.info("wallet_connected", address=self._address, balance=self._balance)
        return self._address

    def disconnect(self) -> None:
        log.info("wallet_disconnected", address=self._address)
        self._address = None
        self._balance = 0.0

    def debit(self, amount: float) -> None:
        if amount > self._balance:
            raise ValueError(f"debit {amount:.2f} exceeds balance {self._balance:.2f}")
        self._balance -= amount

    def credit(self, amount: float) -> None:
        self._balance += amount
