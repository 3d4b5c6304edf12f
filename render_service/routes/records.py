"""
Record Store API Routes.

- POST /api/data: Store an arbitrary JSON payload, returns its id
- POST /api/delete: Delete a record (admin)
- GET /api/list: List every stored record (admin)
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from src.common.repositories import (
    RecordRepositoryInterface,
    generate_record_id,
    get_record_repository,
)

from ..auth import require_admin, require_uploader
from ..models import DeleteResponse, ListResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["records"])


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON")


@router.post(
    "/data",
    status_code=201,
    response_model=UploadResponse,
    dependencies=[Depends(require_uploader)],
)
async def upload_data(
    request: Request,
    repo: RecordRepositoryInterface = Depends(get_record_repository),
) -> UploadResponse:
    """
    Store a JSON payload under a fresh id.

    Raises:
        HTTPException: 400 for invalid JSON, 500 if the store fails
    """
    data = await _read_json(request)
    record_id = generate_record_id()

    try:
        repo.put(record_id, data)
    except Exception as e:
        logger.error(f"Failed to store record {record_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return UploadResponse(uuid=record_id)


@router.post(
    "/delete",
    response_model=DeleteResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_record(
    request: Request,
    repo: RecordRepositoryInterface = Depends(get_record_repository),
) -> DeleteResponse:
    body = await _read_json(request)
    record_id = body.get("id") if isinstance(body, dict) else None
    if not isinstance(record_id, str) or not record_id:
        raise HTTPException(status_code=400, detail="Missing id")

    try:
        repo.delete(record_id)
    except Exception as e:
        logger.error(f"Failed to delete record {record_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return DeleteResponse(deleted=record_id)


@router.get(
    "/list",
    response_model=ListResponse,
    dependencies=[Depends(require_admin)],
)
async def list_records(
    repo: RecordRepositoryInterface = Depends(get_record_repository),
) -> ListResponse:
    try:
        items = repo.scan()
    except Exception as e:
        logger.error(f"Failed to list records: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return ListResponse(items=items, count=len(items))
