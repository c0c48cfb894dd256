"""
Router for uploading, listing, downloading and deleting files.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse

from lockbox.errors import NoFileUploaded, StorageError, StoredFileNotFound
from lockbox.storage.catalog import FileCatalog
from lockbox.storage.store import UploadStore
from lockbox_api.dependencies import (
    get_catalog,
    get_store,
    require_user,
    require_user_for_index,
    require_user_for_uploads,
)
from lockbox_api.views import render_file_list, render_upload_form, render_upload_success

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse, summary="Upload form")
async def index(user: Optional[str] = Depends(require_user_for_index)) -> HTMLResponse:
    return HTMLResponse(render_upload_form(user))


@router.post("/upload", summary="Upload a single file")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    user: str = Depends(require_user),
    store: UploadStore = Depends(get_store),
):
    """
    Store the file sent in the ``file`` form field.

    Returns:
        Success page linking to the stored file, or a 400 if no file was sent
    """
    try:
        if file is None:
            raise NoFileUploaded("No file uploaded.")
        stored_name = store.store(file.file, file.filename)
    except NoFileUploaded:
        return PlainTextResponse("No file uploaded.", status_code=400)
    except StorageError as e:
        logger.error(f"Error saving upload from {user!r}: {str(e)}")
        return PlainTextResponse("Unable to save file.", status_code=500)
    finally:
        if file is not None:
            await file.close()

    return HTMLResponse(render_upload_success(stored_name))


@router.get("/uploads/{name}", summary="Download a stored file")
async def download_file(
    name: str,
    user: Optional[str] = Depends(require_user_for_uploads),
    store: UploadStore = Depends(get_store),
):
    try:
        path = store.retrieve(name)
    except StoredFileNotFound:
        return PlainTextResponse("File not found.", status_code=404)

    return FileResponse(path)


@router.get("/list", response_class=HTMLResponse, summary="List stored files")
async def list_files(
    user: str = Depends(require_user),
    catalog: FileCatalog = Depends(get_catalog),
):
    try:
        names = catalog.list_all()
    except StorageError:
        return PlainTextResponse("Unable to scan files.", status_code=500)

    return HTMLResponse(render_file_list(names))


@router.delete("/delete/{name}", summary="Delete a stored file")
async def delete_file(
    name: str,
    user: str = Depends(require_user),
    store: UploadStore = Depends(get_store),
) -> PlainTextResponse:
    """
    Delete a stored file.

    A missing file and a filesystem failure both answer 500 with the same
    message; they are only told apart in the log.
    """
    try:
        store.delete(name)
    except StoredFileNotFound:
        logger.warning(f"Delete of missing file {name!r} requested by {user!r}")
        return PlainTextResponse("Unable to delete file.", status_code=500)
    except StorageError as e:
        logger.error(f"Error deleting {name!r}: {str(e)}")
        return PlainTextResponse("Unable to delete file.", status_code=500)

    return PlainTextResponse("File deleted successfully.")
