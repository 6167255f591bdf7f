"""
Tests for the mnemonic-derived Ed25519 signer.
"""
import pytest

from edunews.errors import InvalidMnemonic
from edunews.services.signer import Ed25519Signer, verify_signature
from edunews.tests.fakes import ALICE_URI, BOB_URI, DEV_PHRASE
from edunews.utils.address import is_valid_address


def test_same_phrase_same_address():
    assert Ed25519Signer.from_mnemonic(ALICE_URI).address == Ed25519Signer.from_mnemonic(ALICE_URI).address


def test_junctions_derive_different_keys():
    base = Ed25519Signer.from_mnemonic(DEV_PHRASE)
    alice = Ed25519Signer.from_mnemonic(ALICE_URI)
    bob = Ed25519Signer.from_mnemonic(BOB_URI)
    assert len({base.address, alice.address, bob.address}) == 3


def test_address_format():
    signer = Ed25519Signer.from_mnemonic(ALICE_URI)
    assert is_valid_address(signer.address)
    assert signer.public_key() == signer.address


@pytest.mark.parametrize("phrase", [
    "",
    "too short phrase",
    "bottom drive obey lake curtain smoke basket hold race lonely fit",  # 11 words
    "Bottom drive obey lake curtain smoke basket hold race lonely fit walk",
    DEV_PHRASE + "//",
])
def test_invalid_mnemonic(phrase):
    with pytest.raises(InvalidMnemonic):
        Ed25519Signer.from_mnemonic(phrase)


def test_sign_and_verify():
    signer = Ed25519Signer.from_mnemonic(ALICE_URI)
    signature = signer.sign(b"message")
    assert len(signature) == 64
    assert verify_signature(signer.address, b"message", signature)
    assert not verify_signature(signer.address, b"other message", signature)


def test_verify_with_other_key_fails():
    alice = Ed25519Signer.from_mnemonic(ALICE_URI)
    bob = Ed25519Signer.from_mnemonic(BOB_URI)
    assert not verify_signature(bob.address, b"message", alice.sign(b"message"))


def test_verify_with_malformed_address_is_false():
    alice = Ed25519Signer.from_mnemonic(ALICE_URI)
    assert not verify_signature("not-an-address", b"m", alice.sign(b"m"))


def test_repr_does_not_leak_key():
    alice = Ed25519Signer.from_mnemonic(ALICE_URI)
    assert repr(alice) == f"Ed25519Signer({alice.address})"


def test_invalid_mnemonic_message_states_format_check():
    with pytest.raises(InvalidMnemonic) as exc_info:
        Ed25519Signer.from_mnemonic("too short phrase")
    assert "format check only" in str(exc_info.value)


def test_words_are_not_checked_against_a_wordlist():
    signer = Ed25519Signer.from_mnemonic(" ".join(["zzz"] * 12))
    assert is_valid_address(signer.address)
