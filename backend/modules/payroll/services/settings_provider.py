"""
Run-scoped resolution of payroll policy settings.

A ``SettingsProvider`` is created for one calculation run and discarded
afterwards; its cache never outlives the run. ``resolve()`` freezes the
values into a ``ResolvedSettings`` snapshot that is passed explicitly down
the call graph.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional, Union

from ..enums.payroll_enums import DEFAULT_PAYROLL_SETTINGS, PayrollSettingKey
from ..interfaces.repositories import SettingsRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSettings:
    """Immutable snapshot of the policy values used by one calculation run."""
    product_commission_rate: Decimal = DEFAULT_PAYROLL_SETTINGS[PayrollSettingKey.PRODUCT_COMMISSION_RATE]
    retention_bonus_per_repeat: Decimal = DEFAULT_PAYROLL_SETTINGS[PayrollSettingKey.RETENTION_BONUS_PER_REPEAT]
    retention_bonus_threshold: Decimal = DEFAULT_PAYROLL_SETTINGS[PayrollSettingKey.RETENTION_BONUS_THRESHOLD]
    retention_bonus_extra: Decimal = DEFAULT_PAYROLL_SETTINGS[PayrollSettingKey.RETENTION_BONUS_EXTRA]
    buffer_time_minutes: Decimal = DEFAULT_PAYROLL_SETTINGS[PayrollSettingKey.BUFFER_TIME_MINUTES]


class SettingsProvider:
    """Looks up named numeric settings, falling back to engine defaults."""

    def __init__(self, repository: SettingsRepository):
        self.repository = repository
        self._cache: Dict[str, Decimal] = {}

    def get_setting(self, key: Union[str, PayrollSettingKey], default: Union[Decimal, int, float, str]) -> Decimal:
        """
        Return the stored value for ``key`` or ``default``.

        The first lookup of a key hits the settings store; later lookups on
        the same provider are served from the cache. A missing row or a value
        that is not a number yields the default without raising.
        """
        name = key.value if isinstance(key, PayrollSettingKey) else key
        if name in self._cache:
            return self._cache[name]

        raw = self.repository.get_value(name)
        value = self._to_decimal(raw)
        if value is None:
            logger.debug(f"Payroll setting '{name}' not configured, using default {default}")
            value = self._to_decimal(default)
            if value is None:
                value = Decimal("0")

        self._cache[name] = value
        return value

    def resolve(self) -> ResolvedSettings:
        """Resolve every engine setting into an immutable snapshot."""
        values = {
            key.value: self.get_setting(key, default)
            for key, default in DEFAULT_PAYROLL_SETTINGS.items()
        }
        return ResolvedSettings(**values)

    @staticmethod
    def _to_decimal(raw) -> Optional[Decimal]:
        if raw is None or isinstance(raw, bool):
            return None
        try:
            value = Decimal(str(raw))
        except (InvalidOperation, ValueError):
            return None
        if not value.is_finite():
            return None
        return value
