"""Domain models for the multisig account."""
