"""
Notification Service - Notification triggers for market activity.

Responsibilities:
- Notify on bet placement
- Notify on settlement (won / lost) when a market resolves
- Email settlement results when mail is enabled
"""
import logging
from datetime import datetime
from typing import Optional, Dict

from bson import ObjectId
from flask import current_app
from flask_mail import Message

from predictx.extensions import db as mongo

logger = logging.getLogger(__name__)


class NotificationType:
    """Notification type constants."""
    BET_PLACED = "bet_placed"
    BET_WON = "bet_won"
    BET_LOST = "bet_lost"

    DEPOSIT_CONFIRMED = "deposit_confirmed"
    WITHDRAWAL_INITIATED = "withdrawal_initiated"


class NotificationService:
    """Service for managing notifications."""

    @classmethod
    def create_notification(
        cls,
        user_id: str,
        notification_type: str,
        title: str,
        message: str,
        data: Optional[Dict] = None,
        priority: str = "normal"
    ) -> str:
        """
        Create a notification for a user.

        Args:
            user_id: User to notify
            notification_type: Type of notification
            title: Notification title
            message: Notification message
            data: Additional data (event_id, bet_id, etc.)
            priority: Priority level (low, normal, high)

        Returns:
            Notification ID
        """
        notification = {
            "user_id": ObjectId(user_id),
            "type": notification_type,
            "title": title,
            "message": message,
            "data": data or {},
            "priority": priority,
            "read": False,
            "created_at": datetime.utcnow()
        }

        result = mongo.notifications.insert_one(notification)
        return str(result.inserted_id)

    @classmethod
    def send_email(cls, to: str, subject: str, body: str) -> bool:
        """Send a plain-text email if mail is enabled. Failures are logged, not raised."""
        if not current_app.config.get("MAIL_ENABLED"):
            return False

        mail = current_app.extensions["mail"]
        try:
            mail.send(Message(subject=subject, recipients=[to], body=body))
        except Exception as e:
            logger.warning("Failed to send email to %s: %s", to, e)
            return False
        return True

    # ==================== WALLET NOTIFICATIONS ====================

    @classmethod
    def notify_deposit(cls, user_id: str, amount: float, payment_method: str) -> str:
        return cls.create_notification(
            user_id=user_id,
            notification_type=NotificationType.DEPOSIT_CONFIRMED,
            title="Deposit Successful",
            message=f"Successfully added ₹{amount:,.2f} to your wallet",
            data={"amount": amount, "payment_method": payment_method}
        )

    @classmethod
    def notify_withdrawal(cls, user_id: str, amount: float) -> str:
        return cls.create_notification(
            user_id=user_id,
            notification_type=NotificationType.WITHDRAWAL_INITIATED,
            title="Withdrawal Initiated",
            message=f"Successfully initiated withdrawal of ₹{amount:,.2f}",
            data={"amount": amount}
        )

    # ==================== BET NOTIFICATIONS ====================

    @classmethod
    def notify_bet_placed(
        cls,
        user_id: str,
        bet_id: str,
        event_id: str,
        event_title: str,
        bet_type: str,
        quantity: int,
        cost: float
    ) -> str:
        """Notify user that their bet went through."""
        return cls.create_notification(
            user_id=user_id,
            notification_type=NotificationType.BET_PLACED,
            title="Bet Placed",
            message=f"Successfully placed a {bet_type.upper()} bet of {quantity} contracts on {event_title}",
            data={
                "bet_id": bet_id,
                "event_id": event_id,
                "type": bet_type,
                "quantity": quantity,
                "cost": cost
            }
        )

    @classmethod
    def notify_bet_settled(
        cls,
        user: Dict,
        bet_id: str,
        event: Dict,
        won: bool,
        payout: float,
        profit: float
    ) -> str:
        """Notify user of a settled bet, by email too when enabled."""
        outcome = event["outcome"].upper()
        if won:
            title = "Prediction Won"
            message = f"{event['title']} resolved {outcome}. ₹{payout:,.2f} was credited to your wallet (₹{profit:,.2f} profit)."
            notification_type = NotificationType.BET_WON
        else:
            title = "Prediction Lost"
            message = f"{event['title']} resolved {outcome}. Better luck next time."
            notification_type = NotificationType.BET_LOST

        user_id = str(user["_id"])
        notification_id = cls.create_notification(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            data={
                "bet_id": bet_id,
                "event_id": str(event["_id"]),
                "outcome": event["outcome"],
                "payout": payout,
                "profit": profit
            },
            priority="high" if won else "normal"
        )

        if user.get("email"):
            cls.send_email(user["email"], title, message)

        return notification_id
