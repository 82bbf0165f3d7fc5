"""
System settings and feature flags.

Setting values are stored as text and converted according to ``value_type``.
"""

import json
from typing import Any, List, Optional

from sqlmodel import Session, select

from clubhub.core.errors import NotFoundError, ValidationError
from clubhub.core.logging import get_logger
from clubhub.models.setting import FeatureFlag, SystemSetting
from clubhub.schemas.setting import FeatureFlagResponse, SettingResponse
from clubhub.services.collection_service import CollectionService

logger = get_logger(__name__)

LOGO_SETTING_KEY = "site_logo"

_TRUE_VALUES = {"true", "1", "yes", "on"}


def parse_value(value: Optional[str], value_type: str) -> Any:
    """
    Convert stored text to its typed value.

    Unparseable numbers and JSON fall back to the raw text and are logged.
    """
    if value is None:
        return None
    if value_type == "boolean":
        return value.strip().lower() in _TRUE_VALUES
    if value_type == "number":
        try:
            number = float(value)
        except ValueError:
            logger.warning(f"Setting value {value!r} is not a number")
            return value
        return int(number) if number.is_integer() else number
    if value_type == "json":
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Setting value is not valid JSON")
            return value
    return value


def serialize_value(value: Any, value_type: str) -> Optional[str]:
    """
    Convert an incoming value to stored text.

    Raises:
        ValidationError: Value does not fit ``value_type``
    """
    if value is None:
        return None
    if value_type == "json":
        return json.dumps(value)
    if value_type == "boolean":
        if isinstance(value, bool):
            return "true" if value else "false"
        return "true" if str(value).strip().lower() in _TRUE_VALUES else "false"
    if value_type == "number":
        if isinstance(value, bool):
            raise ValidationError("Setting value must be a number")
        try:
            float(value)
        except (TypeError, ValueError):
            raise ValidationError("Setting value must be a number")
        return str(value)
    return str(value)


def setting_response(setting: SystemSetting) -> SettingResponse:
    response = SettingResponse.model_validate(setting)
    response.parsed_value = parse_value(setting.value, setting.value_type)
    return response


class SettingsService:
    def __init__(self, session: Session):
        self.session = session
        self.settings = CollectionService(session, SystemSetting, "setting", search_fields=("key", "description"))
        self.flags = CollectionService(session, FeatureFlag, "feature flag", search_fields=("key", "name"))

    def public_settings(self) -> dict:
        """Public settings as a flat ``{key: parsed value}`` map."""
        rows = self.session.exec(select(SystemSetting).where(SystemSetting.is_public == True))  # noqa: E712
        return {row.key: parse_value(row.value, row.value_type) for row in rows}

    def all_settings(self, category: Optional[str] = None) -> List[SettingResponse]:
        rows, _ = self.settings.list(
            filters={"category": category},
            order_by=[SystemSetting.category, SystemSetting.key],
        )
        return [setting_response(row) for row in rows]

    def feature_flags(self) -> List[FeatureFlagResponse]:
        rows, _ = self.flags.list(order_by=[FeatureFlag.category, FeatureFlag.key])
        return [FeatureFlagResponse.model_validate(row) for row in rows]

    def get_setting(self, key: str) -> Optional[SystemSetting]:
        return self.session.exec(select(SystemSetting).where(SystemSetting.key == key)).first()

    def create_setting(self, data: dict, updated_by: Optional[str]) -> SystemSetting:
        if self.get_setting(data["key"]) is not None:
            raise ValidationError("Setting key already exists")
        value_type = data.get("value_type", "string")
        return self.settings.create(
            {
                **data,
                "value": serialize_value(data.get("value"), value_type),
                "updated_by": updated_by,
            }
        )

    def update_setting(self, key: str, value: Any, updated_by: Optional[str]) -> SystemSetting:
        setting = self.get_setting(key)
        if setting is None:
            raise NotFoundError("Setting not found")
        return self.settings.update(
            setting.id,
            {"value": serialize_value(value, setting.value_type), "updated_by": updated_by},
        )

    def upsert_setting(self, key: str, value: str, updated_by: Optional[str], **defaults: Any) -> SystemSetting:
        setting = self.get_setting(key)
        if setting is None:
            return self.settings.create({"key": key, "value": value, "updated_by": updated_by, **defaults})
        return self.settings.update(setting.id, {"value": value, "updated_by": updated_by})

    def set_flag(self, key: str, is_enabled: bool, updated_by: Optional[str]) -> FeatureFlag:
        flag = self.session.exec(select(FeatureFlag).where(FeatureFlag.key == key)).first()
        if flag is None:
            raise NotFoundError("Feature flag not found")
        flag = self.flags.update(flag.id, {"is_enabled": is_enabled, "updated_by": updated_by})
        logger.info(f"Feature flag {key} set to {is_enabled}")
        return flag

    def stats(self) -> dict:
        return {
            "totalSettings": self.settings.count(),
            "publicSettings": self.settings.count(SystemSetting.is_public == True),  # noqa: E712
            "totalFeatures": self.flags.count(),
            "enabledFeatures": self.flags.count(FeatureFlag.is_enabled == True),  # noqa: E712
        }
