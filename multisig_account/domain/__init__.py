"""Domain layer for the multisig account.

Pure models, invariants, errors and change records. Nothing in this
package performs I/O or depends on application or infrastructure code.
"""
