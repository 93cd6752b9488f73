"""
Bet Service - contract purchases and settlement.

Responsibilities:
- Validate and place yes/no bets against an open market
- Keep market volumes in step with the money spent on each side
- Settle every active bet when a market resolves
"""
import logging
from datetime import datetime
from typing import Optional, Dict, Any, Tuple, List

from bson import ObjectId

from predictx.extensions import db as mongo
from predictx.settlements.services import SettlementCalculator
from predictx.utils.enums import BetStatus, BetType, EventStatus, TransactionType
from .notification_service import NotificationService
from .wallet_service import WalletService

logger = logging.getLogger(__name__)


class BetService:
    """Service for placing and settling bets."""

    @classmethod
    def place_bet(
        cls,
        user_id: str,
        event_id: ObjectId,
        bet_type: str,
        quantity: int
    ) -> Tuple[bool, Optional[str], Optional[Dict[str, Any]]]:
        """
        Buy `quantity` contracts on one side of a market.

        Logic:
        1. Market must exist, be open and not past its closing date
        2. Cost is the side's price times quantity
        3. Debit the wallet (refused when the balance is short)
        4. Store the bet and grow that side's volume by the cost
        5. If the market stopped being open meanwhile, withdraw and refund

        Returns:
            Tuple of (success, error_message, bet_document)
        """
        event = mongo.events.find_one({"_id": event_id})
        if not event:
            return False, "Event not found", None

        if event.get("status") != EventStatus.OPEN.value:
            return False, "This event is no longer accepting bets", None

        closing_date = event.get("closing_date")
        if closing_date and closing_date < datetime.utcnow():
            return False, "Betting is closed for this event", None

        price = SettlementCalculator.price_for(event, bet_type)
        cost = SettlementCalculator.cost(price, quantity)

        bet_oid = ObjectId()
        success, error, new_balance = WalletService.debit_wallet(
            user_id=user_id,
            amount=cost,
            transaction_type=TransactionType.BET,
            reference_id=str(bet_oid),
            notes=f"{bet_type.upper()} x{quantity} on {event['title']}"
        )
        if not success:
            return False, error, None

        bet = {
            "_id": bet_oid,
            "event_id": event_id,
            "user_id": ObjectId(user_id),
            "type": bet_type,
            "quantity": quantity,
            "price": price,
            "cost": cost,
            "status": BetStatus.ACTIVE.value,
            "payout": 0.0,
            "timestamp": datetime.utcnow(),
            "settled_at": None
        }
        mongo.bets.insert_one(bet)

        volume_field = "yes_volume" if bet_type == BetType.YES.value else "no_volume"
        opened = mongo.events.update_one(
            {"_id": event_id, "status": EventStatus.OPEN.value},
            {"$inc": {volume_field: cost}, "$set": {"updated_at": datetime.utcnow()}}
        )
        if not opened.matched_count:
            # Closed or resolved after the first check. A bet already claimed
            # by settlement stays; otherwise it is withdrawn and refunded.
            withdrawn = mongo.bets.delete_one({"_id": bet_oid, "status": BetStatus.ACTIVE.value})
            if withdrawn.deleted_count:
                WalletService.credit_wallet(
                    user_id=user_id,
                    amount=cost,
                    transaction_type=TransactionType.REFUND,
                    reference_id=str(bet_oid),
                    notes=f"Refund: {event['title']} stopped accepting bets"
                )
                logger.warning("Bet %s on %s withdrawn: event no longer open", bet_oid, event_id)
                return False, "This event is no longer accepting bets", None

        NotificationService.notify_bet_placed(
            user_id=user_id,
            bet_id=str(bet_oid),
            event_id=str(event_id),
            event_title=event["title"],
            bet_type=bet_type,
            quantity=quantity,
            cost=cost
        )

        logger.info("User %s bought %d %s on %s for %.2f", user_id, quantity, bet_type.upper(), event_id, cost)
        bet["balance_after"] = new_balance
        return True, None, bet

    @classmethod
    def settle_event_bets(cls, event: Dict) -> Dict[str, Any]:
        """
        Pay out a resolved market.

        Each bet is claimed with a conditional update on status "active",
        so a bet is credited at most once even if settlement is re-run.
        """
        outcome = event["outcome"]
        fee = float(event.get("fee", 0))
        summary = {"winners": 0, "losers": 0, "total_payout": 0.0, "bets_settled": 0}

        active_bets = list(mongo.bets.find({
            "event_id": event["_id"],
            "status": BetStatus.ACTIVE.value
        }))

        for bet in active_bets:
            won = bet["type"] == outcome
            payout = SettlementCalculator.payout(fee, bet["quantity"]) if won else 0.0
            profit = SettlementCalculator.profit(bet["price"], fee, bet["quantity"]) if won else -bet.get("cost", 0)

            claimed = mongo.bets.update_one(
                {"_id": bet["_id"], "status": BetStatus.ACTIVE.value},
                {"$set": {
                    "status": BetStatus.WON.value if won else BetStatus.LOST.value,
                    "payout": payout,
                    "profit": profit,
                    "settled_at": datetime.utcnow()
                }}
            )
            if claimed.modified_count == 0:
                continue

            user_id = str(bet["user_id"])
            if won and payout > 0:
                WalletService.credit_wallet(
                    user_id=user_id,
                    amount=payout,
                    transaction_type=TransactionType.PAYOUT,
                    reference_id=str(bet["_id"]),
                    notes=f"Payout for {event['title']}"
                )

            summary["bets_settled"] += 1
            if won:
                summary["winners"] += 1
                summary["total_payout"] += payout
            else:
                summary["losers"] += 1

            user = mongo.users.find_one({"_id": bet["user_id"]}, {"email": 1, "name": 1})
            if user:
                NotificationService.notify_bet_settled(
                    user=user,
                    bet_id=str(bet["_id"]),
                    event=event,
                    won=won,
                    payout=payout,
                    profit=profit
                )

        summary["total_payout"] = round(summary["total_payout"], 2)
        return summary

    @classmethod
    def get_user_bets(cls, user_id: str) -> Dict[str, Any]:
        """
        Get a user's bets grouped into active and resolved positions.

        Bets whose market has disappeared are left out.
        """
        bets = list(mongo.bets.find({"user_id": ObjectId(user_id)}).sort("timestamp", -1))
        event_ids = list({b["event_id"] for b in bets})
        events = {e["_id"]: e for e in mongo.events.find({"_id": {"$in": event_ids}})}

        active: List[Dict] = []
        resolved: List[Dict] = []
        for bet in bets:
            event = events.get(bet["event_id"])
            if not event:
                continue

            item = serialize_bet(bet, event)
            if event.get("status") == EventStatus.RESOLVED.value:
                resolved.append(item)
            else:
                active.append(item)

        return {
            "active": active,
            "resolved": resolved,
            "summary": {
                "active_count": len(active),
                "resolved_count": len(resolved),
                "total_active": round(sum(b["price"] * b["quantity"] for b in active), 2),
                "total_resolved": round(sum(b["price"] * b["quantity"] for b in resolved), 2)
            }
        }


def serialize_bet(bet: Dict, event: Optional[Dict] = None) -> Dict[str, Any]:
    data = {
        "_id": str(bet["_id"]),
        "event_id": str(bet["event_id"]),
        "user_id": str(bet["user_id"]),
        "type": bet["type"],
        "quantity": bet["quantity"],
        "price": bet["price"],
        "cost": bet.get("cost", SettlementCalculator.cost(bet["price"], bet["quantity"])),
        "status": bet.get("status", BetStatus.ACTIVE.value),
        "payout": bet.get("payout", 0.0),
        "timestamp": bet["timestamp"].isoformat() if bet.get("timestamp") else None
    }
    if event is not None:
        fee = float(event.get("fee", 0))
        data["event_title"] = event["title"]
        data["event_status"] = event.get("status")
        data["potential_return"] = SettlementCalculator.potential_return(bet["price"], fee, bet["quantity"])
        if event.get("status") == EventStatus.RESOLVED.value:
            won = bet["type"] == event.get("outcome")
            data["won"] = won
            data["profit"] = SettlementCalculator.profit(bet["price"], fee, bet["quantity"]) if won else -data["cost"]
    return data
