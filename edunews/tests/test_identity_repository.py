"""
Tests for IdentityRepository.

Policy under test: any identity record counts as verified.
"""
import pytest

from edunews.errors import InvalidAddress
from edunews.repositories.identity_repository import decode_identity_data


@pytest.mark.asyncio
async def test_no_record_is_unverified(identities, alice):
    identity = await identities.resolve(alice.address)

    assert identity.address == alice.address
    assert identity.verified is False
    assert identity.display_name is None
    assert identity.legal_name is None


@pytest.mark.asyncio
async def test_record_is_verified(identities, ledgers, alice):
    ledgers.identity.set_identity(alice.address, display="Alice News", legal="Alice Ltd")

    identity = await identities.resolve(alice.address)

    assert identity.verified is True
    assert identity.display_name == "Alice News"
    assert identity.legal_name == "Alice Ltd"


@pytest.mark.asyncio
async def test_record_without_names_still_verified(identities, ledgers, alice):
    ledgers.identity.set_identity(alice.address)

    identity = await identities.resolve(alice.address)

    assert identity.verified is True
    assert identity.display_name is None


@pytest.mark.asyncio
async def test_registration_username_tuple(identities, ledgers, alice):
    ledgers.identity.put('Identity', 'IdentityOf', alice.address, value=[
        {'info': {'display': {'Raw': 'Alice'}}, 'judgements': [[0, 'Reasonable']]},
        None,
    ])

    identity = await identities.resolve(alice.address)

    assert identity.verified is True
    assert identity.display_name == 'Alice'


@pytest.mark.asyncio
async def test_address_is_normalized(identities, ledgers, alice):
    ledgers.identity.set_identity(alice.address)
    identity = await identities.resolve(alice.address.upper().replace('0X', '0x'))
    assert identity.address == alice.address
    assert identity.verified


@pytest.mark.asyncio
async def test_invalid_address_rejected_before_read(identities, ledgers):
    with pytest.raises(InvalidAddress):
        await identities.resolve("alice")
    assert ledgers.identity.reads == []


@pytest.mark.parametrize("value,expected", [
    (None, None),
    ('None', None),
    ('Plain', 'Plain'),
    ({'Raw': 'Raw text'}, 'Raw text'),
    ({'Raw5': '0x' + 'hello'.encode().hex()}, 'hello'),
    ({'Sha256': '0x' + '00' * 32}, None),
])
def test_decode_identity_data(value, expected):
    assert decode_identity_data(value) == expected
