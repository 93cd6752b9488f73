"""Event (market) documents."""
from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Optional

from predictx.settlements.services import SettlementCalculator
from predictx.utils.enums import EventStatus


@dataclass
class Event:
    title: str
    description: str
    category: str
    closing_date: datetime
    resolution_date: datetime
    resolution_source: str
    yes_price: float
    no_price: float
    fee: float
    image_url: Optional[str] = None
    status: str = EventStatus.OPEN.value
    yes_volume: float = 0.0
    no_volume: float = 0.0
    outcome: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_document(self):
        return asdict(self)


def _iso(value):
    return value.isoformat() if hasattr(value, "isoformat") else value


def serialize_event(event):
    """Turn an event document into its JSON shape, with volume split."""
    data = dict(event)
    data["_id"] = str(data["_id"])
    for key in ("closing_date", "resolution_date", "created_at", "updated_at", "resolved_at"):
        if data.get(key) is not None:
            data[key] = _iso(data[key])
    data.update(SettlementCalculator.volume_split(event.get("yes_volume", 0), event.get("no_volume", 0)))
    return data
