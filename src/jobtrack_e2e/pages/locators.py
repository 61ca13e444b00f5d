"""Selectors and per-page locator maps.

A ``Selector`` is an ordered list of candidate selector strings. The first
candidate is the canonical one; later candidates are fallbacks that
tolerate markup drift. Resolution order is explicit (see
``PageActions.resolve``) instead of relying on the engine's comma
semantics, so it is always clear which candidate actually matched.

A ``LocatorMap`` binds every member of a page's field enum to a selector
and refuses to build if any member is missing, so a typo in a page object
fails at import time rather than producing an empty selector at run time.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Generic, TypeVar

from jobtrack_e2e.core.exceptions import LocatorMapError

F = TypeVar("F", bound=Enum)


@dataclass(frozen=True)
class Selector:
    """Ordered candidate selectors, first match wins."""

    candidates: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.candidates:
            raise ValueError("Selector needs at least one candidate")
        if any(not candidate.strip() for candidate in self.candidates):
            raise ValueError(f"Blank candidate in selector {self.candidates!r}")

    @classmethod
    def of(cls, *candidates: str) -> Selector:
        return cls(tuple(candidates))

    @property
    def primary(self) -> str:
        return self.candidates[0]

    def with_suffix(self, suffix: str) -> Selector:
        """Narrow every candidate, e.g. ``.with_suffix('[href="/all-jobs"]')``."""
        return Selector(tuple(f"{candidate}{suffix}" for candidate in self.candidates))

    def __iter__(self) -> Iterator[str]:
        return iter(self.candidates)

    def __str__(self) -> str:
        return " | ".join(self.candidates)


SelectorLike = str | Sequence[str] | Selector


def _to_selector(value: SelectorLike) -> Selector:
    if isinstance(value, Selector):
        return value
    if isinstance(value, str):
        return Selector.of(value)
    return Selector(tuple(value))


class LocatorMap(Mapping[F, Selector], Generic[F]):
    """Read-only, complete mapping from a field enum to selectors.

    Example:
        class LoginField(Enum):
            EMAIL = "email"
            SUBMIT = "submit"

        LOCATORS = LocatorMap(LoginField, {
            LoginField.EMAIL: 'input[name="email"]',
            LoginField.SUBMIT: ('button[type="submit"]', 'button:has-text("Login")'),
        })
    """

    def __init__(self, fields: type[F], entries: Mapping[F, SelectorLike]) -> None:
        missing = [member.name for member in fields if member not in entries]
        unexpected = [repr(key) for key in entries if not isinstance(key, fields)]
        if missing or unexpected:
            raise LocatorMapError(fields.__name__, missing=missing, unexpected=unexpected)

        resolved: dict[F, Selector] = {}
        for member in fields:
            try:
                resolved[member] = _to_selector(entries[member])
            except ValueError as e:
                raise LocatorMapError(fields.__name__, missing=[member.name]) from e

        self.fields = fields
        self._entries = MappingProxyType(resolved)

    def __getitem__(self, key: F) -> Selector:
        return self._entries[key]

    def __iter__(self) -> Iterator[F]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LocatorMap({self.fields.__name__}, {len(self)} fields)"
