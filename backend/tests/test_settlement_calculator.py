import pytest

from predictx.settlements.services import SettlementCalculator

EVENT = {"yes_price": 0.35, "no_price": 0.65, "fee": 0.02}


class TestPricing:

    def test_price_for_each_side(self):
        assert SettlementCalculator.price_for(EVENT, "yes") == 0.35
        assert SettlementCalculator.price_for(EVENT, "no") == 0.65

    def test_cost_is_price_times_quantity(self):
        assert SettlementCalculator.cost(0.35, 10) == 3.5

    def test_quote_matches_bet_slip(self):
        quote = SettlementCalculator.quote(EVENT, "yes", 10)

        assert quote["cost"] == 3.5
        assert quote["fee"] == 0.2
        assert quote["potential_return"] == pytest.approx(6.3)

    def test_potential_return_never_negative(self):
        assert SettlementCalculator.potential_return(0.99, 0.05, 3) == 0.0

    def test_prices_from_probability(self):
        prices = SettlementCalculator.prices_from_probability(35)

        assert prices["yes_price"] == 0.35
        assert prices["no_price"] == 0.65


class TestPayout:

    def test_winning_payout_deducts_fee(self):
        assert SettlementCalculator.payout(0.02, 10) == 9.8

    def test_profit(self):
        assert SettlementCalculator.profit(0.35, 0.02, 10) == 6.3


class TestVolumeSplit:

    def test_split_rounds_yes_and_fills_no(self):
        split = SettlementCalculator.volume_split(5000, 8500)

        assert split["total_volume"] == 13500
        assert split["yes_percentage"] == 37
        assert split["no_percentage"] == 63

    def test_empty_market_is_even(self):
        split = SettlementCalculator.volume_split(0, 0)

        assert split == {"total_volume": 0, "yes_percentage": 50, "no_percentage": 50}
