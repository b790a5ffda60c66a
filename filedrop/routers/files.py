import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import FileResponse, PlainTextResponse, StreamingResponse

from filedrop.core.config import Settings
from filedrop.core.deps import get_settings_dep, get_storage_service
from filedrop.core.security import CurrentUser, get_current_user
from filedrop.models.files import DeleteResponse, FileListResponse, UploadResponse
from filedrop.services.preview import FileCategory, classify, iter_text_preview, media_type_for
from filedrop.services.storage import FileNotFound, InvalidFileName, StorageError, StorageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found.")


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    file: Optional[UploadFile] = File(None),
    user: CurrentUser = Depends(get_current_user),
    storage: StorageService = Depends(get_storage_service),
):
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded!")

    try:
        name = storage.save_file(user.id, file.filename, file.file)
    except InvalidFileName:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid file name.")
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save file.")

    return UploadResponse(filename=name)


@router.get("/files", response_model=FileListResponse)
def list_files(
    user: CurrentUser = Depends(get_current_user),
    storage: StorageService = Depends(get_storage_service),
):
    return FileListResponse(files=storage.list_files(user.id))


@router.get("/files/{name}", response_class=FileResponse)
def download_file(
    name: str,
    user: CurrentUser = Depends(get_current_user),
    storage: StorageService = Depends(get_storage_service),
):
    try:
        path = storage.resolve(user.id, name)
    except FileNotFound:
        raise _not_found()
    return FileResponse(path, filename=path.name)


@router.get("/files/{name}/preview")
def preview_file(
    name: str,
    user: CurrentUser = Depends(get_current_user),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings_dep),
):
    """
    Aperçu selon l'extension :
    - image / pdf / audio / vidéo : flux inline avec le type MIME dérivé
    - texte : les N premières lignes (+ marqueur si tronqué)
    - autre : téléchargement forcé
    """
    try:
        path = storage.resolve(user.id, name)
    except FileNotFound:
        return PlainTextResponse("File not found.", status_code=status.HTTP_404_NOT_FOUND)

    category = classify(path.name)
    media_type = media_type_for(path.name)

    if category is FileCategory.other:
        return FileResponse(path, filename=path.name)

    if category is FileCategory.text:
        # ouverture avant le début de la réponse : une erreur ici reste un vrai 500
        try:
            handle = open(path, "r", encoding="utf-8", errors="replace", newline="")
        except OSError as e:
            logger.error("Preview read failed for %s: %s", path, e)
            return PlainTextResponse("Error reading file.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return StreamingResponse(
            iter_text_preview(handle, settings.PREVIEW_MAX_LINES),
            media_type=media_type,
        )

    return FileResponse(path, media_type=media_type)


@router.delete("/files/{name}", response_model=DeleteResponse)
def delete_file(
    name: str,
    user: CurrentUser = Depends(get_current_user),
    storage: StorageService = Depends(get_storage_service),
):
    try:
        storage.delete_file(user.id, name)
    except FileNotFound:
        raise _not_found()
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete file.")

    return DeleteResponse()
