"""File browsing and editing API endpoints."""

import logging

from fastapi import APIRouter
from fastapi import Depends
from fastapi import File
from fastapi import Form
from fastapi import HTTPException
from fastapi import Query
from fastapi import UploadFile

from library_core.errors import LibraryError
from library_core.models import DirectoryListing
from library_core.models import FileRecord

from ..dependencies import get_library_service
from ..dependencies import require_admin
from ..models.files import ActionResponse
from ..models.files import EditRequest
from ..models.files import FolderListResponse
from ..models.files import PathRequest
from ..models.files import UploadResponse
from ..services.library_service import LibraryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.get("/list", response_model=DirectoryListing)
def list_directory(
    path: str = Query(default="", description="Directory path, defaults to the library root"),
    service: LibraryService = Depends(get_library_service),
) -> DirectoryListing:
    """List folders and files at a path.

    Raises:
        403: Path escapes the library root
        404: Path doesn't exist or is not a directory
        500: Unexpected filesystem error
    """
    try:
        return service.list_directory(path)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to list directory {path}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to list directory: {e}") from e


@router.get("/file", response_model=FileRecord)
def read_file(
    path: str = Query(default="", description="File path"),
    service: LibraryService = Depends(get_library_service),
) -> FileRecord:
    """Read a text file, or describe a binary one.

    Binary files come back with null content; fetch them from the static mount.

    Raises:
        400: Missing path
        403: Path escapes the library root
        404: File not found
        500: Unreadable file
    """
    try:
        return service.read_file(path)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to read file {path}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to read file: {e}") from e


@router.post("/edit", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def edit_file(
    request: EditRequest,
    service: LibraryService = Depends(get_library_service),
) -> ActionResponse:
    """Overwrite an existing editable file.

    Raises:
        400: Missing path/content, or file type is not editable
        403: Path escapes the library root, or admin token missing
        404: File not found
    """
    try:
        path = service.write_file(request.path, request.content)
        return ActionResponse(message="File updated successfully", path=path)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to edit file {request.path}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to edit file: {e}") from e


@router.post("/delete", response_model=ActionResponse, dependencies=[Depends(require_admin)])
def delete_item(
    request: PathRequest,
    service: LibraryService = Depends(get_library_service),
) -> ActionResponse:
    """Delete a file or a folder (recursively).

    Raises:
        400: Missing path
        403: Path escapes the library root, targets the root, or admin token missing
        404: Nothing at the path
    """
    try:
        path = service.delete(request.path)
        return ActionResponse(message="Item deleted successfully", path=path)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to delete item {request.path}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete item: {e}") from e


@router.get("/folders", response_model=FolderListResponse)
def list_folders(service: LibraryService = Depends(get_library_service)) -> FolderListResponse:
    """List every folder in the library, for upload-target selection."""
    try:
        return FolderListResponse(folders=service.enumerate_folders())
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to get folders: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to get folders: {e}") from e


@router.post(
    "/folders",
    response_model=ActionResponse,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_folder(
    request: PathRequest,
    service: LibraryService = Depends(get_library_service),
) -> ActionResponse:
    """Create a folder, including missing parents.

    Raises:
        400: Missing path, or a file is in the way
        403: Path escapes the library root, or admin token missing
    """
    try:
        path = service.create_folder(request.path)
        return ActionResponse(message="Folder created successfully", path=path)
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to create folder {request.path}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create folder: {e}") from e


@router.post("/upload", response_model=UploadResponse, dependencies=[Depends(require_admin)])
def upload_file(
    file: UploadFile | None = File(default=None),
    path: str | None = Form(default=None),
    service: LibraryService = Depends(get_library_service),
) -> UploadResponse:
    """Upload a file into a folder, creating the folder if needed.

    Raises:
        400: No file, oversize file, or target is not a folder
        403: Target escapes the library root, or admin token missing
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    try:
        result = service.save_upload(path, file.filename, file.file)
        return UploadResponse(
            message="File uploaded successfully",
            path=result.path,
            filename=result.filename,
            size=result.size,
        )
    except LibraryError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to upload file {file.filename}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to upload file: {e}") from e
    finally:
        file.file.close()
