import logging
import shutil
from pathlib import Path
from typing import BinaryIO, List

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Échec disque (écriture, suppression...)."""


class FileNotFound(StorageError):
    """Fichier absent du dossier de l'utilisateur."""


class InvalidFileName(StorageError):
    pass


class StorageService:
    """
    Service de gestion des fichiers stockés localement.
    Un dossier par utilisateur : <base_path>/<user_id>/<nom d'origine>.
    """

    def __init__(self, base_path: str = "./uploads"):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def user_dir(self, user_id: str) -> Path:
        return self.base_path / user_id

    def ensure_user_dir(self, user_id: str) -> Path:
        path = self.user_dir(user_id)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def list_files(self, user_id: str) -> List[str]:
        """
        Liste les noms de fichiers de l'utilisateur (dossier absent → liste vide).
        """
        folder = self.user_dir(user_id)
        if not folder.is_dir():
            return []
        return sorted(p.name for p in folder.iterdir() if p.is_file())

    def save_file(self, user_id: str, filename: str, source: BinaryIO) -> str:
        """
        Écrit le fichier sous son nom d'origine (écrase un éventuel homonyme).
        Retourne le nom retenu.
        """
        # on ne garde que le dernier composant du chemin
        name = Path(filename.replace("\\", "/")).name
        if name in ("", ".", ".."):
            raise InvalidFileName(filename)

        dest = self.ensure_user_dir(user_id) / name
        try:
            with open(dest, "wb") as out:
                shutil.copyfileobj(source, out)
        except OSError as e:
            logger.error("Write failed for %s: %s", dest, e)
            raise StorageError(f"Write failed: {e}") from e

        logger.info("Saved %s for user %s (%d bytes)", name, user_id, dest.stat().st_size)
        return name

    def resolve(self, user_id: str, name: str) -> Path:
        """
        Chemin d'un fichier existant de l'utilisateur, FileNotFound sinon.
        """
        folder = self.user_dir(user_id).resolve()
        path = (folder / name).resolve()
        # un nom qui sort du dossier utilisateur n'existe pas pour lui
        if path.parent != folder or not path.is_file():
            raise FileNotFound(name)
        return path

    def delete_file(self, user_id: str, name: str) -> None:
        path = self.resolve(user_id, name)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise FileNotFound(name) from e
        except OSError as e:
            logger.error("Delete failed for %s: %s", path, e)
            raise StorageError(f"Delete failed: {e}") from e
        logger.info("Deleted %s for user %s", name, user_id)
