"""Core business logic services for the prediction market."""

from .wallet_service import WalletService
from .market_service import MarketService
from .bet_service import BetService
from .notification_service import NotificationService

__all__ = [
    "WalletService",
    "MarketService",
    "BetService",
    "NotificationService",
]
