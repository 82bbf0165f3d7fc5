"""
System settings, feature flags and the site logo.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile, status

from clubhub.api.deps import ADMINS, SUPER, CurrentUserDep, SessionDep, StorageDep, get_current_user, require_role
from clubhub.core.errors import ClubHubError
from clubhub.core.logging import get_logger
from clubhub.schemas.setting import FeatureFlagResponse, FeatureFlagUpdate, SettingCreate, SettingValueUpdate
from clubhub.services.file_storage_service import SITE_LOGO
from clubhub.services.settings_service import LOGO_SETTING_KEY, SettingsService, setting_response

logger = get_logger(__name__)

router = APIRouter(prefix="/system-settings", tags=["system-settings"])

admins = [Depends(get_current_user), Depends(require_role(*ADMINS))]
super_admin_only = [Depends(get_current_user), Depends(require_role(*SUPER))]


@router.get("/public")
def public_settings(session: SessionDep) -> dict:
    return {"success": True, "settings": SettingsService(session).public_settings()}


@router.get("/all", dependencies=admins)
def all_settings(session: SessionDep, category: Optional[str] = None) -> dict:
    settings = SettingsService(session).all_settings(category)
    return {"success": True, "count": len(settings), "settings": settings}


@router.get("/features", dependencies=admins)
def feature_flags(session: SessionDep) -> dict:
    return {"success": True, "features": SettingsService(session).feature_flags()}


@router.put("/setting/{key}", dependencies=admins)
def update_setting(key: str, body: SettingValueUpdate, session: SessionDep, user: CurrentUserDep) -> dict:
    setting = SettingsService(session).update_setting(key, body.value, user.id)
    logger.info(f"Setting {key} updated by {user.username}")
    return {"success": True, "message": "Setting updated successfully", "setting": setting_response(setting)}


@router.post("/setting", dependencies=super_admin_only, status_code=status.HTTP_201_CREATED)
def create_setting(body: SettingCreate, session: SessionDep, user: CurrentUserDep) -> dict:
    setting = SettingsService(session).create_setting(body.model_dump(), user.id)
    logger.info(f"Setting {setting.key} created by {user.username}")
    return {"success": True, "message": "Setting created successfully", "setting": setting_response(setting)}


@router.put("/feature/{key}", dependencies=admins)
def update_feature(key: str, body: FeatureFlagUpdate, session: SessionDep, user: CurrentUserDep) -> dict:
    flag = SettingsService(session).set_flag(key, body.is_enabled, user.id)
    return {"success": True, "message": "Feature flag updated successfully", "feature": FeatureFlagResponse.model_validate(flag)}


@router.post("/upload-logo", dependencies=admins)
def upload_logo(
    session: SessionDep,
    storage: StorageDep,
    user: CurrentUserDep,
    logo: Annotated[UploadFile, File()],
) -> dict:
    """Store a new logo and point the public ``site_logo`` setting at it."""
    service = SettingsService(session)
    previous = service.get_setting(LOGO_SETTING_KEY)
    old_url = previous.value if previous else None

    stored = storage.save(logo, SITE_LOGO)
    try:
        service.upsert_setting(
            LOGO_SETTING_KEY,
            stored.url,
            user.id,
            category="branding",
            description="Site logo",
            is_public=True,
        )
    except ClubHubError:
        storage.delete(stored.path)
        raise
    if old_url and old_url.startswith("/uploads/"):
        storage.delete(old_url.removeprefix("/uploads/"))
    return {"success": True, "message": "Logo uploaded successfully", "logoUrl": stored.url}


@router.get("/stats", dependencies=admins)
def settings_stats(session: SessionDep) -> dict:
    return {"success": True, "stats": SettingsService(session).stats()}
