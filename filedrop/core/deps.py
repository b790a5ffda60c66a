from fastapi import Depends

from filedrop.core.config import Settings, get_settings
from filedrop.services.storage import StorageService


def get_settings_dep() -> Settings:
    # relu à chaque requête : les tests vident le cache entre deux apps
    return get_settings()


def get_storage_service(settings: Settings = Depends(get_settings_dep)) -> StorageService:
    """
    Service de stockage racine <STORAGE_PATH>, un dossier par utilisateur.
    """
    return StorageService(base_path=settings.STORAGE_PATH)
