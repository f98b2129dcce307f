# api/routes/storage.py
import mimetypes

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from api.dependencies import get_store
from core.exceptions import StorageError
from core.storage import LocalObjectStore

router = APIRouter(prefix="/storage/v1/object", tags=["storage"])

def _file_response(store: LocalObjectStore, bucket: str, path: str) -> FileResponse:
    try:
        target = store.open(bucket, path)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    media_type, _ = mimetypes.guess_type(target.name)
    return FileResponse(target, media_type=media_type or "application/octet-stream")

@router.get("/sign/{bucket}/{path:path}")
def get_signed_object(
    bucket: str,
    path: str,
    token: str = Query(..., description="Token from a signed URL"),
    store: LocalObjectStore = Depends(get_store),
):
    """Serve an object through a signed, time-limited URL."""
    try:
        store.verify_signed_token(bucket, path, token)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _file_response(store, bucket, path)

@router.get("/public/{bucket}/{path:path}")
def get_public_object(bucket: str, path: str, store: LocalObjectStore = Depends(get_store)):
    """Serve an object from a public bucket."""
    bucket_config = store.buckets.get(bucket)
    if bucket_config is None or not bucket_config.public:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bucket not found")
    return _file_response(store, bucket, path)
