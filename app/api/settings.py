"""
Settings API endpoints.
"""
from fastapi import APIRouter, Depends

from app.api.deps import get_settings_store
from app.schemas import settings as settings_schemas
from app.services.settings_service import SettingsStore

router = APIRouter(
    prefix="/settings",
    tags=["settings"]
)


@router.get("", response_model=settings_schemas.GameSettings)
def get_settings(store: SettingsStore = Depends(get_settings_store)):
    return store.settings


@router.patch("", response_model=settings_schemas.GameSettings)
def update_settings(
        changes: settings_schemas.SettingsUpdate,
        store: SettingsStore = Depends(get_settings_store)
):
    """Update only the fields that are sent."""
    return store.update(**changes.model_dump(exclude_none=True))


@router.delete("", response_model=settings_schemas.GameSettings)
def reset_settings(store: SettingsStore = Depends(get_settings_store)):
    """Restore default settings."""
    return store.reset()
