"""Trading session: wallet gate around the pricing engine."""

from predamm.session.errors import InsufficientBalanceError, SessionError, WalletNotConnectedError
from predamm.session.market_session import MarketSession, TradePreview
from predamm.session.signer import MockSigner, Signer

__all__ = [
    "MarketSession",
    "TradePreview",
    "Signer",
    "MockSigner",
    "SessionError",
    "WalletNotConnectedError",
    "InsufficientBalanceError",
]
