"""Per-request Validator registry.

Repeated lookups of the same key within one request return the same Validator,
so its optional state and bag slot are shared by every chain on that key.
"""
from __future__ import annotations

from typing import Any, Callable

from bouncer.logging import validation_logger

from .validator import Validator

log = validation_logger()


class ValidatorRegistry:
    """Memoizes one Validator per key for the lifetime of a request."""

    def __init__(self, ctx: Any, vals: dict[str, Any]):
        self.ctx = ctx
        self.vals = vals
        self._validators: dict[str, Validator] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._validators

    def __len__(self) -> int:
        return len(self._validators)

    def get_or_create(self, key: str, source: Callable[[], Any]) -> Validator:
        """Return the Validator for ``key``, creating it on first use.

        A new Validator starts from the bag's current value when one is set,
        otherwise from ``source()`` (the value extracted from the request).
        """
        validator = self._validators.get(key)
        if validator is not None:
            return validator

        current = self.vals.get(key)
        seeded_from_bag = current is not None
        value = current if seeded_from_bag else source()

        validator = Validator(self.ctx, key, self.vals, value)
        self._validators[key] = validator
        log.debug("validator_created", key=key, seeded_from_bag=seeded_from_bag)
        return validator
