"""Test helpers for multisig account tests.

This package contains reusable test utilities for wiring accounts to
in-memory host primitives.

Helpers:
    AccountHarness: Account plus the stubs it is wired to
    build_harness: Construct an AccountHarness

Usage:
    from tests.helpers import build_harness
"""

from tests.helpers.account_harness import (
    ACCOUNT_ADDRESS,
    ACCOUNT_CODE,
    NEW_ACCOUNT_CODE,
    NOT_AN_ACCOUNT_CODE,
    SIGNER_A,
    SIGNER_B,
    SIGNER_C,
    SIGNER_D,
    SIGNER_E,
    THIRD_ACCOUNT_CODE,
    TOKEN_ADDRESS,
    TX_HASH,
    TX_VERSION,
    AccountHarness,
    build_harness,
    stub_signatures,
)

__all__ = [
    "ACCOUNT_ADDRESS",
    "ACCOUNT_CODE",
    "NEW_ACCOUNT_CODE",
    "NOT_AN_ACCOUNT_CODE",
    "SIGNER_A",
    "SIGNER_B",
    "SIGNER_C",
    "SIGNER_D",
    "SIGNER_E",
    "THIRD_ACCOUNT_CODE",
    "TOKEN_ADDRESS",
    "TX_HASH",
    "TX_VERSION",
    "AccountHarness",
    "build_harness",
    "stub_signatures",
]
