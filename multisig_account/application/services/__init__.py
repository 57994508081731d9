"""Application services of the multisig account."""
