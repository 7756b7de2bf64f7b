from engagement.app.services.reward_provider import (
    REMEDIATION_HINTS,
    ProviderFailure,
    classify_error_message,
    classify_provider_error,
)
from engagement.domain.errors import ProviderError


def test_address_errors():
    error = ProviderError("Participant shipping address is incomplete", status_code=422)
    assert classify_provider_error(error) == ProviderFailure.address_invalid


def test_insufficient_balance():
    error = ProviderError("Insufficient balance in program account", status_code=402)
    assert classify_provider_error(error) == ProviderFailure.insufficient_balance


def test_participant_not_found():
    assert (
        classify_provider_error(ProviderError("Participant not found", status_code=404))
        == ProviderFailure.participant_not_found
    )
    assert (
        classify_provider_error(ProviderError("Unknown participant", status_code=404))
        == ProviderFailure.participant_not_found
    )


def test_response_body_is_considered():
    error = ProviderError(
        "Provider rejected the request", status_code=400, response={"detail": "Not enough funds"}
    )
    assert classify_provider_error(error) == ProviderFailure.insufficient_balance


def test_unknown_failures():
    assert classify_provider_error(ProviderError("Gateway exploded")) == ProviderFailure.unknown
    assert classify_error_message(None) == ProviderFailure.unknown


def test_every_category_has_a_hint():
    assert set(REMEDIATION_HINTS) == set(ProviderFailure)
