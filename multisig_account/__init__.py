"""
Multisig Account - threshold-authorized account core

Decides whether a set of signer approvals satisfies the account's
threshold policy, and governs how that policy changes over time:
adding, removing and replacing signers, changing the threshold, and
upgrading the account's own executable code.

Core rules:
- A request is authorized only by exactly `threshold` signatures from
  registered signers, presented in strictly ascending signer order
- Policy changes are self-authorized: only the account may call them
- Every rejected request leaves the account state exactly as it was
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
