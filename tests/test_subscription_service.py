"""Tests for the subscription service."""

import pytest
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import IntegrityError

from waitlist.core.errors import ConflictError, InvalidInputError, NotFoundError
from waitlist.domain.services.subscription_service import SubscriptionService


@pytest.fixture
def service(db_session, sms_provider):
    return SubscriptionService(db_session, sms_provider=sms_provider, brand_name="House of Reign")


async def test_subscribe_with_email(service, sms_provider):
    result = await service.subscribe(email="  Fan@Example.com ", phone=None)

    assert result.subscriber.id is not None
    assert result.subscriber.email == "fan@example.com"
    assert result.subscriber.is_active
    assert not result.subscriber.opted_out
    assert result.contact_method == "email"
    assert result.message.endswith("via email.")
    assert sms_provider.sent == []
    assert await service.count_active() == 1


async def test_subscribe_with_phone_sends_confirmation(service, sms_provider):
    result = await service.subscribe(email=None, phone="(281) 788-2316")

    assert result.subscriber.phone == "(281) 788-2316"
    assert result.subscriber.phone_e164 == "+12817882316"
    assert result.contact_method == "SMS"
    assert result.sms_sent
    assert sms_provider.sent == [
        {
            "to": "+12817882316",
            "body": (
                "House of Reign: You're in for updates & drops. Reply STOP to opt out, "
                "HELP for help. Msg&data rates may apply."
            ),
        }
    ]


async def test_subscribe_with_both_reports_email(service, sms_provider):
    result = await service.subscribe(email="fan@example.com", phone="2817882316")

    assert result.contact_method == "email"
    assert result.subscriber.phone_e164 == "+12817882316"
    assert len(sms_provider.sent) == 1


@pytest.mark.parametrize(
    "email,phone,message",
    [
        (None, None, "Either email address or phone number is required"),
        ("  ", "", "Either email address or phone number is required"),
        ("not-an-email", None, "Please provide a valid email address"),
        ("fan@nodot", None, "Please provide a valid email address"),
        (None, "12345", "Invalid phone number format"),
        ("fan@example.com", "555", "Invalid phone number format"),
    ],
)
async def test_subscribe_rejects_invalid_input(service, email, phone, message):
    with pytest.raises(InvalidInputError) as exc_info:
        await service.subscribe(email=email, phone=phone)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == message
    assert await service.count_active() == 0


async def test_duplicate_email_conflicts(service):
    await service.subscribe(email="fan@example.com", phone=None)

    with pytest.raises(ConflictError) as exc_info:
        await service.subscribe(email="FAN@example.com", phone=None)

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "This email is already subscribed"
    assert await service.count_active() == 1


async def test_duplicate_phone_conflicts(service):
    await service.subscribe(email=None, phone="281-788-2316")

    with pytest.raises(ConflictError) as exc_info:
        await service.subscribe(email=None, phone="+1 (281) 788 2316")

    assert exc_info.value.message == "This phone number is already subscribed"


async def test_unique_index_is_the_conflict_backstop(service):
    """A row inserted after the pre-check still yields a conflict."""
    await service.subscribe(email="fan@example.com", phone=None)

    with patch.object(service.subscriber_repo, "get_active_by_email", AsyncMock(return_value=None)):
        with pytest.raises(ConflictError) as exc_info:
            await service.subscribe(email="fan@example.com", phone=None)

    assert isinstance(exc_info.value.__cause__, IntegrityError)
    assert await service.count_active() == 1


async def test_sms_failure_does_not_fail_subscription(db_session, failing_sms_provider):
    service = SubscriptionService(db_session, sms_provider=failing_sms_provider)

    result = await service.subscribe(email=None, phone="2817882316")

    assert result.subscriber.id is not None
    assert not result.sms_sent
    assert await service.count_active() == 1


async def test_unexpected_provider_error_is_swallowed(db_session, sms_provider):
    provider = sms_provider
    provider.send_sms = AsyncMock(side_effect=RuntimeError("connection reset"))
    service = SubscriptionService(db_session, sms_provider=provider)

    result = await service.subscribe(email=None, phone="2817882316")

    assert not result.sms_sent
    provider.send_sms.assert_awaited_once()


async def test_no_provider_skips_sms(db_session):
    service = SubscriptionService(db_session, sms_provider=None)

    result = await service.subscribe(email=None, phone="2817882316")

    assert not result.sms_sent


async def test_opted_out_number_gets_no_confirmation(service, sms_provider):
    first = await service.subscribe(email="fan@example.com", phone="2817882316")
    await service.subscriber_repo.set_opted_out("+12817882316", True)
    await service.unsubscribe("fan@example.com")
    sms_provider.sent.clear()

    second = await service.subscribe(email="fan@example.com", phone="2817882316")

    assert second.subscriber.id != first.subscriber.id
    assert not second.sms_sent
    assert sms_provider.sent == []


async def test_unsubscribe_then_not_found(service):
    await service.subscribe(email="fan@example.com", phone=None)

    await service.unsubscribe("fan@example.com")
    assert await service.count_active() == 0

    with pytest.raises(NotFoundError) as exc_info:
        await service.unsubscribe("fan@example.com")
    assert exc_info.value.message == "Email not found in our records"


async def test_unsubscribe_unknown_email(service):
    with pytest.raises(NotFoundError):
        await service.unsubscribe("nobody@example.com")


@pytest.mark.parametrize("email", [None, "", "nope"])
async def test_unsubscribe_requires_valid_email(service, email):
    with pytest.raises(InvalidInputError) as exc_info:
        await service.unsubscribe(email)
    assert exc_info.value.message == "Valid email address is required"


async def test_resubscribe_after_unsubscribe(service):
    await service.subscribe(email="fan@example.com", phone=None)
    await service.unsubscribe("fan@example.com")

    result = await service.subscribe(email="fan@example.com", phone=None)

    assert result.subscriber.is_active
    assert await service.count_active() == 1
