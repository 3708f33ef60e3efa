from __future__ import annotations

from types import SimpleNamespace

import pytest
import stripe

from app.application.dto.auth import ProvisionAccountInput
from app.application.use_cases.provision_account import ProvisionAccountUseCase
from app.application.use_cases.verify_checkout import VerifyCheckoutUseCase
from app.domain.entities.identity import PASSWORD_HASH_KEY
from app.domain.exceptions import AccountAlreadyExistsError, UpstreamServiceError
from app.infrastructure.clients.stripe_client import StripeClient
from app.infrastructure.repositories.stripe_identity_repository import StripeIdentityRepository
from tests.fakes import FakeBillingPort, FakePasswordHasher, FakeSessionCodec, make_checkout


def _missing() -> stripe.InvalidRequestError:
    return stripe.InvalidRequestError("No such object", None, code="resource_missing", http_status=404)


class FakeCheckoutSessions:
    def __init__(self, sessions: dict):
        self.sessions = sessions
        self.retrieve_params = None
        self.create_params = None

    def retrieve(self, session_id, params=None):
        self.retrieve_params = params
        if session_id not in self.sessions:
            raise _missing()
        return self.sessions[session_id]

    def create(self, params=None):
        self.create_params = params
        return {"id": "cs_new", "url": "https://checkout.stripe.test/cs_new"}


class FakeCustomers:
    def __init__(self, customers: dict):
        self.customers = customers
        self.update_params = None
        self.fail_with = None

    def retrieve(self, customer_id):
        if self.fail_with is not None:
            raise self.fail_with
        if customer_id not in self.customers:
            raise _missing()
        return self.customers[customer_id]

    def list(self, params=None):
        email = params["email"]
        return {"data": [c for c in self.customers.values() if c.get("email") == email][: params["limit"]]}

    def update(self, customer_id, params=None):
        self.update_params = params
        customer = {**self.customers[customer_id], "metadata": params["metadata"]}
        self.customers[customer_id] = customer
        return customer


class FakeSubscriptions:
    def __init__(self, subscriptions: dict):
        self.subscriptions = subscriptions

    def retrieve(self, subscription_id):
        if subscription_id not in self.subscriptions:
            raise _missing()
        return self.subscriptions[subscription_id]


def _fake_sdk(*, sessions=None, customers=None, subscriptions=None):
    return SimpleNamespace(
        checkout=SimpleNamespace(sessions=FakeCheckoutSessions(sessions or {})),
        customers=FakeCustomers(customers or {}),
        subscriptions=FakeSubscriptions(subscriptions or {}),
    )


def test_checkout_session_maps_modes_and_expanded_links():
    sdk = _fake_sdk(
        sessions={
            "cs_test_123": {
                "id": "cs_test_123",
                "mode": "subscription",
                "status": "complete",
                "payment_status": "paid",
                "customer": {"id": "cus_1"},
                "customer_details": {"email": "buyer@example.com"},
                "customer_email": None,
                "subscription": {"id": "sub_1", "status": "active"},
                "amount_total": 1900,
                "currency": "usd",
            },
            "cs_once": {
                "id": "cs_once",
                "mode": "payment",
                "status": "complete",
                "payment_status": "paid",
                "customer": "cus_2",
                "customer_details": None,
                "customer_email": "fallback@example.com",
                "subscription": None,
            },
        }
    )
    client = StripeClient(client=sdk)

    recurring = client.get_checkout_session(reference="cs_test_123")
    one_time = client.get_checkout_session(reference="cs_once")

    assert sdk.checkout.sessions.retrieve_params == {"expand": ["subscription"]}
    assert recurring.mode == "recurring"
    assert recurring.customer_id == "cus_1"
    assert recurring.customer_email == "buyer@example.com"
    assert recurring.subscription_id == "sub_1"
    assert one_time.mode == "one_time"
    assert one_time.customer_id == "cus_2"
    assert one_time.customer_email is None
    assert one_time.fallback_email == "fallback@example.com"
    assert one_time.subscription_id is None


def test_missing_resources_resolve_to_none():
    client = StripeClient(client=_fake_sdk())

    assert client.get_checkout_session(reference="cs_missing") is None
    assert client.get_subscription_status(subscription_id="sub_missing") is None


def test_subscription_status_is_read_live():
    sdk = _fake_sdk(subscriptions={"sub_1": {"id": "sub_1", "status": "past_due"}})

    status = StripeClient(client=sdk).get_subscription_status(subscription_id="sub_1")

    assert status.status == "past_due"
    assert not status.is_active


def test_create_checkout_session_sends_single_card_line_item():
    sdk = _fake_sdk()

    output = StripeClient(client=sdk).create_checkout_session(
        price_id="price_1",
        mode="subscription",
        success_url="https://app.test/success",
        cancel_url="https://app.test/products",
    )

    params = sdk.checkout.sessions.create_params
    assert params["line_items"] == [{"price": "price_1", "quantity": 1}]
    assert params["payment_method_types"] == ["card"]
    assert params["allow_promotion_codes"] is True
    assert output.session_id == "cs_new"


def test_identity_repository_merge_keeps_unrelated_metadata():
    sdk = _fake_sdk(customers={"cus_1": {"id": "cus_1", "email": "a@example.com", "metadata": {"crm_ref": "x"}}})
    repository = StripeIdentityRepository(client=sdk)

    updated = repository.merge_update(identity_id="cus_1", fields={PASSWORD_HASH_KEY: "hash"})

    assert sdk.customers.update_params == {"metadata": {"crm_ref": "x", PASSWORD_HASH_KEY: "hash"}}
    assert updated.password_hash == "hash"
    assert updated.metadata["crm_ref"] == "x"


def test_identity_repository_treats_deleted_or_missing_customers_as_absent():
    sdk = _fake_sdk(customers={"cus_gone": {"id": "cus_gone", "deleted": True}})
    repository = StripeIdentityRepository(client=sdk)

    assert repository.get(identity_id="cus_gone") is None
    assert repository.get(identity_id="cus_unknown") is None


def test_identity_repository_finds_all_customers_for_email():
    sdk = _fake_sdk(
        customers={
            "cus_1": {"id": "cus_1", "email": "a@example.com", "metadata": {}},
            "cus_2": {"id": "cus_2", "email": "a@example.com", "metadata": {PASSWORD_HASH_KEY: "h"}},
            "cus_3": {"id": "cus_3", "email": "b@example.com", "metadata": {}},
        }
    )

    records = StripeIdentityRepository(client=sdk).find_by_email(email="a@example.com")

    assert [record.id for record in records] == ["cus_1", "cus_2"]
    assert records[1].is_provisioned


def test_provider_errors_become_generic_upstream_errors():
    sdk = _fake_sdk(customers={"cus_1": {"id": "cus_1"}})
    sdk.customers.fail_with = stripe.APIConnectionError("connection reset by peer at 10.0.0.1")

    with pytest.raises(UpstreamServiceError) as exc_info:
        StripeIdentityRepository(client=sdk).get(identity_id="cus_1")

    assert "10.0.0.1" not in str(exc_info.value)


def test_identity_repository_refuses_to_overwrite_guarded_key():
    sdk = _fake_sdk(customers={"cus_1": {"id": "cus_1", "metadata": {PASSWORD_HASH_KEY: "winner-hash"}}})

    with pytest.raises(AccountAlreadyExistsError):
        StripeIdentityRepository(client=sdk).merge_update(
            identity_id="cus_1",
            fields={PASSWORD_HASH_KEY: "late-hash"},
            if_absent=PASSWORD_HASH_KEY,
        )

    assert sdk.customers.update_params is None
    assert sdk.customers.customers["cus_1"]["metadata"][PASSWORD_HASH_KEY] == "winner-hash"


def test_provisioning_over_stripe_keeps_hash_written_by_concurrent_request():
    sdk = _fake_sdk(customers={"cus_1": {"id": "cus_1", "email": "buyer@example.com", "metadata": {}}})
    repository = StripeIdentityRepository(client=sdk)
    billing = FakeBillingPort()
    billing.add_checkout(make_checkout())

    class RacingPasswordHasher(FakePasswordHasher):
        def hash(self, plain_password: str) -> str:
            sdk.customers.customers["cus_1"]["metadata"] = {PASSWORD_HASH_KEY: "winner-hash"}
            return super().hash(plain_password)

    use_case = ProvisionAccountUseCase(
        verify_checkout_use_case=VerifyCheckoutUseCase(billing_port=billing, identity_repository=repository),
        identity_repository=repository,
        password_hasher=RacingPasswordHasher(),
        session_codec=FakeSessionCodec(),
    )

    with pytest.raises(AccountAlreadyExistsError):
        use_case.execute(ProvisionAccountInput(reference="cs_test_123", password="longenough1"))

    assert sdk.customers.update_params is None
    assert repository.get(identity_id="cus_1").password_hash == "winner-hash"
