from datetime import datetime, timedelta

from bson import ObjectId

from predictx.core import WalletService


def place(client, headers, event, bet_type="yes", quantity=10):
    return client.post("/api/v1/bets", json={
        "event_id": str(event["_id"]),
        "type": bet_type,
        "quantity": quantity
    }, headers=headers)


class TestPlaceBet:

    def test_bet_debits_wallet_and_grows_volume(self, client, user, make_event, mongo):
        _, headers = user
        event = make_event()

        res = place(client, headers, event, "yes", 10)

        assert res.status_code == 201
        body = res.get_json()
        assert body["bet"]["price"] == 0.35
        assert body["bet"]["cost"] == 3.5
        assert body["new_balance"] == 4996.5
        assert body["message"] == "Successfully placed a YES bet of 10 contracts"

        stored = mongo.events.find_one({"_id": event["_id"]})
        assert stored["yes_volume"] == 3.5
        assert stored["no_volume"] == 0
        assert mongo.wallet_transactions.count_documents({"type": "bet", "amount": 3.5}) == 1

    def test_no_bet_uses_no_price(self, client, user, make_event):
        _, headers = user
        event = make_event()

        body = place(client, headers, event, "NO", 2).get_json()

        assert body["bet"]["type"] == "no"
        assert body["bet"]["cost"] == 1.3

    def test_quantity_defaults_to_one(self, client, user, make_event):
        _, headers = user
        event = make_event()

        res = client.post("/api/v1/bets", json={"event_id": str(event["_id"]), "type": "yes"}, headers=headers)

        assert res.get_json()["bet"]["quantity"] == 1

    def test_insufficient_funds(self, client, user, make_event, mongo):
        _, headers = user
        event = make_event(initial_yes_percent=99)

        res = place(client, headers, event, "yes", 6000)

        assert res.status_code == 400
        assert res.get_json()["error"] == "Insufficient funds in your wallet"
        assert mongo.bets.count_documents({}) == 0
        assert mongo.events.find_one({"_id": event["_id"]})["yes_volume"] == 0

    def test_requires_login(self, client, make_event):
        event = make_event()

        assert place(client, {}, event).status_code == 401

    def test_invalid_quantity(self, client, user, make_event):
        _, headers = user
        event = make_event()

        assert place(client, headers, event, "yes", 0).status_code == 400
        assert place(client, headers, event, "yes", 2.5).status_code == 400

    def test_invalid_type(self, client, user, make_event):
        _, headers = user
        event = make_event()

        assert place(client, headers, event, "maybe").status_code == 400

    def test_unknown_event(self, client, user):
        _, headers = user

        res = place(client, headers, {"_id": ObjectId()})

        assert res.status_code == 404

    def test_closed_event(self, client, user, make_event, admin_headers):
        _, headers = user
        event = make_event()
        client.post(f"/api/v1/admin/events/{event['_id']}/close", headers=admin_headers)

        res = place(client, headers, event)

        assert res.status_code == 400

    def test_past_closing_date(self, client, user, make_event):
        _, headers = user
        past = datetime.utcnow() - timedelta(days=1)
        event = make_event(closing_date=past, resolution_date=past + timedelta(days=2))

        res = place(client, headers, event)

        assert res.status_code == 400
        assert res.get_json()["error"] == "Betting is closed for this event"

    def test_event_resolved_while_betting_refunds(self, client, user, make_event, mongo, monkeypatch):
        _, headers = user
        event = make_event()
        debit = WalletService.debit_wallet

        def resolve_then_debit(**kwargs):
            mongo.events.update_one({"_id": event["_id"]}, {"$set": {"status": "resolved", "outcome": "no"}})
            return debit(**kwargs)

        monkeypatch.setattr(WalletService, "debit_wallet", resolve_then_debit)

        res = place(client, headers, event, "yes", 10)

        assert res.status_code == 400
        assert res.get_json()["error"] == "This event is no longer accepting bets"
        assert mongo.bets.count_documents({}) == 0
        assert mongo.events.find_one({"_id": event["_id"]})["yes_volume"] == 0
        assert mongo.wallet_transactions.count_documents({"type": "refund", "amount": 3.5}) == 1
        assert client.get("/api/v1/wallet/balance", headers=headers).get_json()["balance"] == 5000

    def test_body_must_be_an_object(self, client, user):
        _, headers = user

        res = client.post("/api/v1/bets", json=[1, 2], headers=headers)

        assert res.status_code == 400
        assert res.get_json()["error"] == "Request body must be a JSON object"


class TestUserBets:

    def test_active_bets_listing(self, client, user, make_event):
        _, headers = user
        event = make_event()
        place(client, headers, event, "yes", 10)
        place(client, headers, event, "no", 5)

        body = client.get("/api/v1/bets", headers=headers).get_json()

        assert body["summary"]["active_count"] == 2
        assert body["summary"]["resolved_count"] == 0
        assert body["summary"]["total_active"] == 6.75
        assert body["active"][0]["event_title"] == event["title"]

    def test_resolved_bets_show_result(self, client, user, make_event, admin_headers):
        _, headers = user
        event = make_event()
        place(client, headers, event, "yes", 10)
        place(client, headers, event, "no", 5)
        client.post(f"/api/v1/admin/events/{event['_id']}/resolve", json={"outcome": "yes"}, headers=admin_headers)

        body = client.get("/api/v1/bets", headers=headers).get_json()

        assert body["summary"]["active_count"] == 0
        results = {b["type"]: b for b in body["resolved"]}
        assert results["yes"]["won"] is True
        assert results["yes"]["profit"] == 6.3
        assert results["no"]["won"] is False
        assert results["no"]["status"] == "lost"

    def test_wallet_summary(self, client, user, make_event):
        _, headers = user
        event = make_event()
        place(client, headers, event, "yes", 10)

        summary = client.get("/api/v1/wallet/summary", headers=headers).get_json()

        assert summary == {"balance": 4996.5, "total_invested": 3.5, "active_bets": 1}
