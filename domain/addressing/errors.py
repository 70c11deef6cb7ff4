"""Addressing Bounded Context - Error Hierarchy."""

from __future__ import annotations


class AddressingError(Exception):
    """Base error for section addressing operations."""


class SectionOutOfRangeError(AddressingError):
    """Section index lies outside the partition it was addressed in.

    Attributes:
        index: The offending 0-based index
        limit: Number of sections in the partition
    """

    def __init__(self, index: int, limit: int, partition: str = "active") -> None:
        self.index = index
        self.limit = limit
        self.partition = partition
        if limit <= 0:
            message = f"{partition.capitalize()} partition has no sections (index {index})"
        else:
            message = f"{partition.capitalize()} section index {index} outside 0..{limit - 1}"
        super().__init__(message)
