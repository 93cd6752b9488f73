import pytest

from predictx.core import WalletService
from predictx.utils.enums import TransactionType


class TestDeposit:

    def test_deposit_credits_balance(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/deposit", json={"amount": 500, "payment_method": "upi"}, headers=headers)

        assert res.status_code == 201
        assert res.get_json()["new_balance"] == 5500
        assert client.get("/api/v1/wallet/balance", headers=headers).get_json()["balance"] == 5500

    def test_payment_method_defaults_to_card(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/deposit", json={"amount": 100}, headers=headers)

        assert res.get_json()["payment_method"] == "card"

    def test_non_positive_amount(self, client, user):
        _, headers = user

        assert client.post("/api/v1/wallet/deposit", json={"amount": 0}, headers=headers).status_code == 400
        assert client.post("/api/v1/wallet/deposit", json={"amount": -10}, headers=headers).status_code == 400

    @pytest.mark.parametrize("amount", ["nan", "inf", "-inf"])
    def test_non_finite_amount(self, client, user, mongo, amount):
        _, headers = user
        res = client.post("/api/v1/wallet/deposit", json={"amount": amount}, headers=headers)

        assert res.status_code == 400
        assert res.get_json()["error"] == "Please enter a valid amount"
        assert client.get("/api/v1/wallet/balance", headers=headers).get_json()["balance"] == 5000
        assert mongo.wallet_transactions.count_documents({"type": "deposit"}) == 0

    def test_unknown_payment_method(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/deposit", json={"amount": 100, "payment_method": "cash"}, headers=headers)

        assert res.status_code == 400

    def test_requires_login(self, client):
        assert client.post("/api/v1/wallet/deposit", json={"amount": 100}).status_code == 401


class TestWithdraw:

    PAYLOAD = {"amount": 1000, "account_number": "123456789012", "ifsc_code": "hdfc0001234"}

    def test_withdraw_debits_balance(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/withdraw", json=self.PAYLOAD, headers=headers)

        assert res.status_code == 200
        assert res.get_json()["new_balance"] == 4000

    def test_insufficient_funds(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/withdraw", json={**self.PAYLOAD, "amount": 5000.01}, headers=headers)

        assert res.status_code == 400
        assert res.get_json()["error"] == "Insufficient funds in your wallet"
        assert client.get("/api/v1/wallet/balance", headers=headers).get_json()["balance"] == 5000

    def test_whole_balance_can_be_withdrawn(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/withdraw", json={**self.PAYLOAD, "amount": 5000}, headers=headers)

        assert res.get_json()["new_balance"] == 0

    def test_short_account_number(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/withdraw", json={**self.PAYLOAD, "account_number": "12345"}, headers=headers)

        assert res.status_code == 400
        assert res.get_json()["error"] == "Please enter a valid account number"

    def test_numeric_account_number(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/withdraw", json={**self.PAYLOAD, "account_number": 123456789012}, headers=headers)

        assert res.status_code == 200

    @pytest.mark.parametrize("amount", ["nan", "inf", "-inf"])
    def test_non_finite_amount(self, client, user, amount):
        _, headers = user
        res = client.post("/api/v1/wallet/withdraw", json={**self.PAYLOAD, "amount": amount}, headers=headers)

        assert res.status_code == 400
        assert client.get("/api/v1/wallet/balance", headers=headers).get_json()["balance"] == 5000

    def test_short_ifsc(self, client, user):
        _, headers = user
        res = client.post("/api/v1/wallet/withdraw", json={**self.PAYLOAD, "ifsc_code": "HDFC"}, headers=headers)

        assert res.status_code == 400
        assert res.get_json()["error"] == "Please enter a valid IFSC code"


class TestHistory:

    def test_transactions_newest_first(self, client, user):
        _, headers = user
        client.post("/api/v1/wallet/deposit", json={"amount": 250}, headers=headers)

        body = client.get("/api/v1/wallet/transactions", headers=headers).get_json()

        assert body["total"] == 2
        assert [t["type"] for t in body["transactions"]] == ["deposit", "bonus"]
        assert body["transactions"][0]["balance_after"] == 5250

    def test_transactions_pagination(self, client, user):
        _, headers = user
        for amount in (10, 20, 30):
            client.post("/api/v1/wallet/deposit", json={"amount": amount}, headers=headers)

        body = client.get("/api/v1/wallet/transactions?page=2&per_page=3", headers=headers).get_json()

        assert body["pages"] == 2
        assert len(body["transactions"]) == 1


class TestWalletService:

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf"), 0, -5])
    def test_credit_and_debit_reject_invalid_amounts(self, app, user, amount):
        account, _ = user
        with app.app_context():
            credited = WalletService.credit_wallet(account["id"], amount, TransactionType.DEPOSIT)
            debited = WalletService.debit_wallet(account["id"], amount, TransactionType.WITHDRAW)

            assert credited == (False, "Amount must be positive", 0.0)
            assert debited == (False, "Amount must be positive", 0.0)
            assert WalletService.get_wallet_balance(account["id"]) == 5000
