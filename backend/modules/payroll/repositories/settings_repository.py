from decimal import Decimal
from typing import List, Optional
import logging
from sqlalchemy.orm import Session

from ..enums.payroll_enums import DEFAULT_PAYROLL_SETTINGS, PayrollSettingKey
from ..exceptions import PayrollNotFoundError
from ..interfaces.repositories import SettingsRepository
from ..models.payroll_configuration import PayrollSetting

logger = logging.getLogger(__name__)

SETTING_DESCRIPTIONS = {
    PayrollSettingKey.PRODUCT_COMMISSION_RATE: "Commission percentage on product sales",
    PayrollSettingKey.RETENTION_BONUS_PER_REPEAT: "Bonus per repeat customer in the month",
    PayrollSettingKey.RETENTION_BONUS_THRESHOLD: "Repeat customers needed for the extra retention bonus",
    PayrollSettingKey.RETENTION_BONUS_EXTRA: "Extra retention bonus once the threshold is reached",
    PayrollSettingKey.BUFFER_TIME_MINUTES: "Turnover minutes added to every completed appointment",
}


class SqlAlchemySettingsRepository(SettingsRepository):

    def __init__(self, db: Session):
        self.db = db

    def get_value(self, key: str) -> Optional[Decimal]:
        row = (
            self.db.query(PayrollSetting.setting_value)
            .filter(PayrollSetting.setting_key == key)
            .first()
        )
        return row.setting_value if row else None

    def list_settings(self) -> List[PayrollSetting]:
        return self.db.query(PayrollSetting).order_by(PayrollSetting.setting_key).all()

    def update_setting(
        self, key: str, value: Decimal, updated_by: Optional[str] = None
    ) -> PayrollSetting:
        setting = self.db.query(PayrollSetting).filter(PayrollSetting.setting_key == key).first()
        if not setting:
            raise PayrollNotFoundError("Payroll setting", key)

        previous = setting.setting_value
        setting.setting_value = value
        setting.updated_by = updated_by
        self.db.commit()
        self.db.refresh(setting)

        logger.info(f"Payroll setting {key} changed from {previous} to {value} by {updated_by or 'unknown'}")
        return setting

    def ensure_defaults(self) -> List[str]:
        """Insert engine defaults for keys missing from the table. Returns the keys added."""
        existing = {row.setting_key for row in self.db.query(PayrollSetting.setting_key).all()}
        added = []
        for key, value in DEFAULT_PAYROLL_SETTINGS.items():
            if key.value in existing:
                continue
            self.db.add(
                PayrollSetting(
                    setting_key=key.value,
                    setting_value=value,
                    description=SETTING_DESCRIPTIONS.get(key),
                    updated_by="system",
                )
            )
            added.append(key.value)

        if added:
            self.db.commit()
            logger.info(f"Seeded default payroll settings: {', '.join(added)}")
        return added
