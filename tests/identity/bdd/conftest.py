"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from identity.user.registration import RegisterUser
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@given(parsers.cfparse('a registered user "{email}" with password "{password}"'), target_fixture="session")
def registered_user(email, password):
    command = RegisterUser(name="Jane Doe", email=email, password=password)
    return current_domain.process(command, asynchronous=False)


@then(parsers.cfparse("the request fails with {kind}"))
def request_failed(error, kind):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == kind
