from typing import List
from pydantic import BaseModel, Field


class FileListResponse(BaseModel):
    files: List[str] = Field(default_factory=list, description="Noms des fichiers de l'utilisateur")


class UploadResponse(BaseModel):
    success: bool = True
    filename: str
    message: str = "File uploaded successfully."


class DeleteResponse(BaseModel):
    success: bool = True
    message: str = "File deleted."
