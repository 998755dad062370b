"""Session-level trade rejections (wallet gate), separate from pricing errors."""

from __future__ import annotations


class SessionError(Exception):
    """Base for session errors."""

    code = "session_error"


class WalletNotConnectedError(SessionError):
    code = "wallet_not_connected"


class InsufficientBalanceError(SessionError):
    code = "insufficient_balance"

    def __init__(self, required: float, balance: float) -> None:
        super().__init__(f"need {required:.2f} (amount + fee), balance is {balance:.2f}")
        self.required = required
        self.balance = balance
