"""
Politique d'aperçu : catégorie déduite de l'extension, puis réponse adaptée
(flux binaire inline, texte tronqué, ou téléchargement forcé).
"""
from enum import Enum
from pathlib import PurePath
from typing import Dict, Iterator, Optional, TextIO

TRUNCATION_MARKER = "... (truncated)"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


class FileCategory(str, Enum):
    image = "image"
    pdf = "pdf"
    audio = "audio"
    video = "video"
    text = "text"
    other = "other"


_CATEGORIES: Dict[FileCategory, tuple] = {
    FileCategory.image: ("jpg", "jpeg", "png", "gif", "webp", "bmp", "svg"),
    FileCategory.pdf: ("pdf",),
    FileCategory.audio: ("mp3", "wav", "ogg", "m4a", "flac", "aac"),
    FileCategory.video: ("mp4", "webm", "mov", "mkv"),
    FileCategory.text: ("txt", "md", "csv", "json", "log"),
}

_EXTENSION_CATEGORY: Dict[str, FileCategory] = {
    ext: category for category, exts in _CATEGORIES.items() for ext in exts
}

# extension → type MIME quand "<catégorie>/<ext>" n'est pas le bon type
_MEDIA_TYPE_OVERRIDES: Dict[str, str] = {
    "jpg": "image/jpeg",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "m4a": "audio/mp4",
    "mov": "video/quicktime",
    "mkv": "video/x-matroska",
}


def extension_of(name: str) -> str:
    return PurePath(name).suffix[1:].lower()


def classify(name: str) -> FileCategory:
    return _EXTENSION_CATEGORY.get(extension_of(name), FileCategory.other)


def media_type_for(name: str) -> Optional[str]:
    """
    Type MIME servi pour l'aperçu, None pour la catégorie "other".
    """
    ext = extension_of(name)
    category = classify(name)
    if category is FileCategory.other:
        return None
    if category is FileCategory.text:
        return TEXT_MEDIA_TYPE
    return _MEDIA_TYPE_OVERRIDES.get(ext, f"{category.value}/{ext}")


def iter_text_preview(handle: TextIO, max_lines: int = 20) -> Iterator[str]:
    """
    Émet les `max_lines` premières lignes telles quelles. S'il en reste,
    ajoute le marqueur de troncature et s'arrête sans lire la suite.
    Le handle est fermé dans tous les cas (fin, troncature, erreur, abandon).
    """
    try:
        for index, line in enumerate(handle):
            if index >= max_lines:
                yield TRUNCATION_MARKER
                return
            yield line
    finally:
        handle.close()
