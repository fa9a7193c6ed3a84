"""Safe-string wrapper for pre-escaped output."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SafeString:
    """String marked as already escaped.

    The evaluator skips auto-escaping for these. Filters that produce markup
    (raw, nl2br, escape) return one; every other filter reads it as plain text.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)
