"""Contract pricing and payout arithmetic."""
from typing import Dict


class SettlementCalculator:
    """
    Money math for yes/no contracts.

    A contract costs its side's price up front. A winning contract pays 1
    minus the event fee; a losing contract pays nothing.
    """

    @staticmethod
    def price_for(event: Dict, bet_type: str) -> float:
        return float(event["yes_price"] if bet_type == "yes" else event["no_price"])

    @staticmethod
    def cost(price: float, quantity: int) -> float:
        return round(price * quantity, 2)

    @staticmethod
    def fee_amount(fee: float, quantity: int) -> float:
        return round(fee * quantity, 2)

    @staticmethod
    def potential_return(price: float, fee: float, quantity: int) -> float:
        """Profit if the position wins, never negative."""
        potential = quantity * (1 - price - fee)
        return round(potential, 2) if potential > 0 else 0.0

    @staticmethod
    def payout(fee: float, quantity: int) -> float:
        return round(quantity * (1 - fee), 2)

    @staticmethod
    def profit(price: float, fee: float, quantity: int) -> float:
        return round(quantity * (1 - price - fee), 2)

    @staticmethod
    def prices_from_probability(yes_percent: float) -> Dict[str, float]:
        """Convert an initial YES probability (1-99%) into a price pair."""
        yes_price = round(yes_percent / 100, 4)
        return {"yes_price": yes_price, "no_price": round(1 - yes_price, 4)}

    @staticmethod
    def volume_split(yes_volume: float, no_volume: float) -> Dict[str, float]:
        total = (yes_volume or 0) + (no_volume or 0)
        if total <= 0:
            return {"total_volume": 0, "yes_percentage": 50, "no_percentage": 50}
        yes_percentage = round(yes_volume / total * 100)
        return {
            "total_volume": round(total, 2),
            "yes_percentage": yes_percentage,
            "no_percentage": 100 - yes_percentage
        }

    @staticmethod
    def quote(event: Dict, bet_type: str, quantity: int) -> Dict[str, float]:
        price = SettlementCalculator.price_for(event, bet_type)
        fee = float(event.get("fee", 0))
        return {
            "type": bet_type,
            "quantity": quantity,
            "price": price,
            "cost": SettlementCalculator.cost(price, quantity),
            "fee": SettlementCalculator.fee_amount(fee, quantity),
            "potential_return": SettlementCalculator.potential_return(price, fee, quantity)
        }
