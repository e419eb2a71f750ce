"""
Shared fixtures: a signer identity backed by a software device, plus the
transactions most tests start from.
"""
import pytest

from persona_tx import HardwareSignerCoordinator

from helpers import (
    SoftwareDevice,
    mk_address,
    mk_identity,
    mk_private_key,
    mk_transfer,
    mk_vote_tx,
)


@pytest.fixture
def signer_key():
    """Deterministic secp256k1 key of the default signer."""
    return mk_private_key(b"signer")


@pytest.fixture
def identity():
    """Signer identity matching ``signer_key`` on device account 0."""
    return mk_identity(b"signer")


@pytest.fixture
def unrelated_address():
    """An address that belongs to nobody in the tests."""
    return mk_address(b"unrelated")


@pytest.fixture
def transfer_tx():
    """Unsigned transfer of 100 with no sender key yet."""
    return mk_transfer(amount=100)


@pytest.fixture
def vote_tx(unrelated_address):
    """Unsigned vote wrongly addressed to an unrelated address."""
    return mk_vote_tx(recipient=unrelated_address)


@pytest.fixture
def software_device(signer_key):
    """Device holding the signer key at account index 0."""
    return SoftwareDevice({0: signer_key})


@pytest.fixture
def coordinator(software_device):
    """Coordinator talking to the software device."""
    return HardwareSignerCoordinator(software_device)
