#!/usr/bin/env python3

from typing import Iterator, List


class ValidationResult:
    def __init__(self):
        self.errors: List[str] = []

    def report(self, msg: str):
        """Add an error to the result."""
        self.errors.append(msg)

    def raise_if_invalid(self, exc_type: type = ValueError):
        """Raise `exc_type` with every collected error at once, if any were collected."""
        if self.errors:
            raise exc_type(list(self.errors))

    def is_valid(self) -> bool:
        return not self.errors

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.errors)

    def __repr__(self):
        return f"<ValidationResult valid={self.is_valid()} errors={len(self.errors)}>"
