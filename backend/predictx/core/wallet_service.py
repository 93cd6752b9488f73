"""
Wallet Service - virtual wallet accounting.

Responsibilities:
- Credit and debit a user's wallet balance
- Refuse debits that would overdraw the wallet
- Keep a transaction ledger for every balance movement
"""
import logging
import math
from datetime import datetime
from typing import Optional, Dict, Tuple, List

from bson import ObjectId
from pymongo import ReturnDocument

from predictx.extensions import db as mongo
from predictx.utils.enums import TransactionType

logger = logging.getLogger(__name__)

INSUFFICIENT_FUNDS = "Insufficient funds in your wallet"


class WalletService:
    """Service for wallet balance movements."""

    @classmethod
    def get_wallet_balance(cls, user_id: str) -> float:
        """Get user's wallet balance."""
        user = mongo.users.find_one({"_id": ObjectId(user_id)}, {"wallet_balance": 1})
        if not user:
            return 0.0
        return round(float(user.get("wallet_balance", 0)), 2)

    @classmethod
    def credit_wallet(
        cls,
        user_id: str,
        amount: float,
        transaction_type: TransactionType,
        reference_id: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Tuple[bool, Optional[str], float]:
        """
        Credit user's wallet.

        Args:
            user_id: User ID
            amount: Amount to credit
            transaction_type: Ledger type (deposit, payout, bonus)
            reference_id: Reference to bet/event
            notes: Optional notes

        Returns:
            Tuple of (success, error_message, new_balance)
        """
        amount = round(float(amount), 2)
        if not math.isfinite(amount) or amount <= 0:
            return False, "Amount must be positive", 0.0

        user = mongo.users.find_one_and_update(
            {"_id": ObjectId(user_id)},
            {"$inc": {"wallet_balance": amount}},
            return_document=ReturnDocument.AFTER
        )
        if not user:
            return False, "User not found", 0.0

        new_balance = round(float(user["wallet_balance"]), 2)
        cls._record_transaction(user_id, transaction_type, amount, new_balance, reference_id, notes)

        logger.info("Credited %.2f to %s (%s)", amount, user_id, transaction_type.value)
        return True, None, new_balance

    @classmethod
    def debit_wallet(
        cls,
        user_id: str,
        amount: float,
        transaction_type: TransactionType,
        reference_id: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Tuple[bool, Optional[str], float]:
        """
        Debit user's wallet.

        The balance check and the decrement happen in one conditional
        update, so two concurrent debits can never overdraw the wallet.

        Returns:
            Tuple of (success, error_message, new_balance)
        """
        amount = round(float(amount), 2)
        if not math.isfinite(amount) or amount <= 0:
            return False, "Amount must be positive", 0.0

        user = mongo.users.find_one_and_update(
            {"_id": ObjectId(user_id), "wallet_balance": {"$gte": amount}},
            {"$inc": {"wallet_balance": -amount}},
            return_document=ReturnDocument.AFTER
        )
        if not user:
            if not mongo.users.count_documents({"_id": ObjectId(user_id)}):
                return False, "User not found", 0.0
            logger.info("Debit of %.2f refused for %s: insufficient funds", amount, user_id)
            return False, INSUFFICIENT_FUNDS, cls.get_wallet_balance(user_id)

        new_balance = round(float(user["wallet_balance"]), 2)
        cls._record_transaction(user_id, transaction_type, amount, new_balance, reference_id, notes)

        logger.info("Debited %.2f from %s (%s)", amount, user_id, transaction_type.value)
        return True, None, new_balance

    @classmethod
    def _record_transaction(
        cls,
        user_id: str,
        transaction_type: TransactionType,
        amount: float,
        balance_after: float,
        reference_id: Optional[str],
        notes: Optional[str]
    ) -> None:
        mongo.wallet_transactions.insert_one({
            "user_id": ObjectId(user_id),
            "type": transaction_type.value,
            "amount": amount,
            "balance_after": balance_after,
            "reference_id": reference_id,
            "notes": notes,
            "status": "completed",
            "created_at": datetime.utcnow()
        })

    @classmethod
    def get_wallet_transactions(
        cls,
        user_id: str,
        page: int = 1,
        per_page: int = 20
    ) -> Tuple[List[Dict], int]:
        """Get wallet transaction history, newest first."""
        query = {"user_id": ObjectId(user_id)}
        total = mongo.wallet_transactions.count_documents(query)
        transactions = list(
            mongo.wallet_transactions.find(query)
            .sort([("created_at", -1), ("_id", -1)])
            .skip((page - 1) * per_page)
            .limit(per_page)
        )

        for tx in transactions:
            tx["_id"] = str(tx["_id"])
            tx["user_id"] = str(tx["user_id"])
            if tx.get("created_at"):
                tx["created_at"] = tx["created_at"].isoformat()

        return transactions, total

    @classmethod
    def get_wallet_summary(cls, user_id: str) -> Dict:
        """Balance plus what is currently tied up in bets."""
        bets = list(mongo.bets.find({"user_id": ObjectId(user_id)}, {"cost": 1, "status": 1}))
        total_invested = round(sum(b.get("cost", 0) for b in bets), 2)
        active_bets = sum(1 for b in bets if b.get("status") == "active")

        return {
            "balance": cls.get_wallet_balance(user_id),
            "total_invested": total_invested,
            "active_bets": active_bets
        }
