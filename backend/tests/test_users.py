from tests.conftest import auth_header


class TestDashboard:

    def test_profile(self, client, user):
        _, headers = user

        body = client.get("/api/v1/users/profile", headers=headers).get_json()

        assert body["email"] == "asha@predictx.io"
        assert body["wallet_balance"] == 5000

    def test_summary_before_and_after_resolution(self, client, user, make_event, admin_headers):
        _, headers = user
        event = make_event()
        client.post("/api/v1/bets", json={"event_id": str(event["_id"]), "type": "yes", "quantity": 10}, headers=headers)

        before = client.get("/api/v1/users/summary", headers=headers).get_json()
        assert before["bets_placed"] == 1
        assert before["active_bets"] == 1
        assert before["total_invested"] == 3.5
        assert before["net_profit"] == 0

        client.post(f"/api/v1/admin/events/{event['_id']}/resolve", json={"outcome": "yes"}, headers=admin_headers)

        after = client.get("/api/v1/users/summary", headers=headers).get_json()
        assert after["resolved_bets"] == 1
        assert after["total_payout"] == 9.8
        assert after["net_profit"] == 6.3
        assert after["wallet_balance"] == 5006.3

    def test_admin_token_has_no_user_profile(self, client, admin_headers):
        assert client.get("/api/v1/users/profile", headers=admin_headers).status_code == 401

    def test_health(self, client):
        assert client.get("/api/v1/health").get_json() == {"status": "ok"}

    def test_unknown_route_is_json(self, client):
        res = client.get("/api/v1/nope", headers=auth_header("x"))

        assert res.status_code == 404
        assert "error" in res.get_json()
