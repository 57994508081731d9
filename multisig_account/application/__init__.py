"""Application layer: ports and services of the multisig account."""
