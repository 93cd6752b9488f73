from enum import Enum


class EventStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    RESOLVED = "resolved"


class BetType(str, Enum):
    YES = "yes"
    NO = "no"


class BetStatus(str, Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


class TransactionType(str, Enum):
    BONUS = "bonus"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    BET = "bet"
    PAYOUT = "payout"
    REFUND = "refund"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class PaymentMethod(str, Enum):
    CARD = "card"
    UPI = "upi"


CATEGORIES = ["Sports", "Finance", "Politics", "Climate", "Technology", "Entertainment"]
