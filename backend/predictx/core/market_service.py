"""
Market Service - event lifecycle.

Responsibilities:
- Create markets with prices derived from an initial probability
- Close markets to new bets
- Resolve markets and hand settlement to the bet service
"""
import logging
from datetime import datetime
from typing import Optional, Dict, Any, Tuple, List

from bson import ObjectId
from pymongo import ReturnDocument

from predictx.extensions import db as mongo
from predictx.events.models import Event
from predictx.settlements.services import SettlementCalculator
from predictx.utils.enums import BetStatus, EventStatus

logger = logging.getLogger(__name__)


class MarketService:
    """Service for creating, closing and resolving markets."""

    @classmethod
    def create_event(
        cls,
        title: str,
        description: str,
        category: str,
        closing_date: datetime,
        resolution_date: datetime,
        resolution_source: str,
        initial_yes_percent: float = 50,
        fee_percent: float = 2,
        image_url: Optional[str] = None
    ) -> Tuple[bool, Optional[str], Optional[Dict]]:
        """
        Create a new open market.

        Args:
            initial_yes_percent: Initial YES probability, 1-99
            fee_percent: Fee per winning contract as a percentage, 0-10

        Returns:
            Tuple of (success, error_message, event_document)
        """
        if closing_date > resolution_date:
            return False, "Closing date must be before resolution date", None

        if not 1 <= initial_yes_percent <= 99:
            return False, "Initial YES price must be between 1% and 99%", None

        if not 0 <= fee_percent <= 10:
            return False, "Fee must be between 0% and 10%", None

        prices = SettlementCalculator.prices_from_probability(initial_yes_percent)
        event = Event(
            title=title.strip(),
            description=description.strip(),
            category=category,
            closing_date=closing_date,
            resolution_date=resolution_date,
            resolution_source=resolution_source.strip(),
            yes_price=prices["yes_price"],
            no_price=prices["no_price"],
            fee=round(fee_percent / 100, 4),
            image_url=image_url or None
        ).to_document()

        result = mongo.events.insert_one(event)
        event["_id"] = result.inserted_id

        logger.info("Created event %s: %s", result.inserted_id, event["title"])
        return True, None, event

    @classmethod
    def close_event(cls, event_id: ObjectId) -> Tuple[bool, Optional[str], Optional[Dict]]:
        """Stop accepting bets on an open market."""
        event = mongo.events.find_one_and_update(
            {"_id": event_id, "status": EventStatus.OPEN.value},
            {"$set": {"status": EventStatus.CLOSED.value, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        if not event:
            if not mongo.events.count_documents({"_id": event_id}):
                return False, "Event not found", None
            return False, "Only open events can be closed", None

        logger.info("Closed event %s", event_id)
        return True, None, event

    @classmethod
    def resolve_event(
        cls,
        event_id: ObjectId,
        outcome: str
    ) -> Tuple[bool, Optional[str], Optional[Dict[str, Any]]]:
        """
        Resolve a market and pay out winning bets.

        The status flip is conditional on the event not being resolved yet,
        so a market can only ever be settled once. Resolving again with the
        same outcome finishes an interrupted settlement: only bets still
        active are paid.

        Returns:
            Tuple of (success, error_message, result) where result holds the
            event and the settlement summary.
        """
        from .bet_service import BetService

        now = datetime.utcnow()
        event = mongo.events.find_one_and_update(
            {"_id": event_id, "status": {"$ne": EventStatus.RESOLVED.value}},
            {"$set": {
                "status": EventStatus.RESOLVED.value,
                "outcome": outcome,
                "resolved_at": now,
                "updated_at": now
            }},
            return_document=ReturnDocument.AFTER
        )
        if not event:
            event = mongo.events.find_one({"_id": event_id})
            if not event:
                return False, "Event not found", None
            pending = mongo.bets.count_documents({"event_id": event_id, "status": BetStatus.ACTIVE.value})
            if event.get("outcome") != outcome or not pending:
                return False, "Event is already resolved", None
            logger.warning("Resuming settlement of event %s: %d bets still active", event_id, pending)

        settlement = BetService.settle_event_bets(event)

        logger.info(
            "Resolved event %s as %s: %d winners, %d losers, %.2f paid out",
            event_id, outcome.upper(), settlement["winners"], settlement["losers"], settlement["total_payout"]
        )
        return True, None, {"event": event, "settlement": settlement}

    @classmethod
    def list_events(
        cls,
        category: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Dict], int]:
        query = {}
        if category and category != "All":
            query["category"] = category
        if status:
            query["status"] = status

        total = mongo.events.count_documents(query)
        events = list(
            mongo.events.find(query)
            .sort([("closing_date", 1), ("_id", 1)])
            .skip((page - 1) * limit)
            .limit(limit)
        )
        return events, total

    @classmethod
    def list_events_for_admin(cls) -> List[Dict]:
        """Open events first, then by resolution date."""
        events = list(mongo.events.find({}))
        events.sort(key=lambda e: (e.get("status") != EventStatus.OPEN.value, e.get("resolution_date") or datetime.max))
        return events
