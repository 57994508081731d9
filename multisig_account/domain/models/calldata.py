"""Flat calldata decoding for account entry points.

Entry points receive calldata as a flat sequence of integers. Scalars
take one slot; arrays are length-prefixed.
"""

from __future__ import annotations

from collections.abc import Sequence

from multisig_account.domain.errors.protocol import MalformedCalldataError


class CalldataReader:
    """Sequential reader over flat calldata.

    Example:
        >>> reader = CalldataReader([2, 1, 0xD])
        >>> reader.read_felt(), reader.read_array()
        (2, [13])
        >>> reader.finish()
    """

    def __init__(self, data: Sequence[int]) -> None:
        self._data = list(data)
        self._offset = 0

    def read_felt(self) -> int:
        if self._offset >= len(self._data):
            raise MalformedCalldataError(
                f"{MalformedCalldataError.code}: calldata ended at offset {self._offset}"
            )
        value = self._data[self._offset]
        self._offset += 1
        return value

    def read_array(self) -> list[int]:
        length = self.read_felt()
        if length < 0 or self._offset + length > len(self._data):
            raise MalformedCalldataError(
                f"{MalformedCalldataError.code}: array of length {length} overruns calldata"
            )
        values = self._data[self._offset : self._offset + length]
        self._offset += length
        return values

    def finish(self) -> None:
        """Assert every slot was consumed."""
        if self._offset != len(self._data):
            raise MalformedCalldataError(
                f"{MalformedCalldataError.code}: {len(self._data) - self._offset} "
                "unexpected trailing values"
            )


def encode_array(values: Sequence[int]) -> list[int]:
    return [len(values), *values]
