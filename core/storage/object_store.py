# core/storage/object_store.py
import logging
import os
import re
import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Dict, Iterable, List, Optional, Union
from urllib.parse import quote
from uuid import uuid4

from jose import JWTError, jwt

from core.exceptions import ObjectExistsError, StorageError

logger = logging.getLogger(__name__)

BOOKS_BUCKET = "books"
COVERS_BUCKET = "book-covers"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class Bucket:
    name: str
    public: bool = False


DEFAULT_BUCKETS = (
    Bucket(BOOKS_BUCKET, public=False),
    Bucket(COVERS_BUCKET, public=True),
)


def make_object_path(filename: Optional[str]) -> str:
    """Build a unique storage path for an uploaded file.

    The path is a random token followed by the sanitized original filename,
    so two uploads of the same file never collide.
    """
    name = PurePosixPath((filename or "").replace("\\", "/")).name
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).strip("._") or "file"
    return f"{uuid4().hex}-{name}"


class LocalObjectStore:
    """Bucketed object storage on the local filesystem.

    Private buckets are read through signed, time-limited URLs; public buckets
    through stable public URLs. Both URL kinds are served by the storage routes
    of the HTTP API.
    """

    def __init__(
        self,
        root: Union[str, Path],
        secret: str,
        public_url: str = "http://localhost:8000",
        buckets: Iterable[Bucket] = DEFAULT_BUCKETS,
        algorithm: str = "HS256",
    ):
        self.root = Path(root)
        self.secret = secret
        self.public_url = public_url.rstrip("/")
        self.algorithm = algorithm
        self.buckets: Dict[str, Bucket] = {b.name: b for b in buckets}

    def _bucket(self, name: str) -> Bucket:
        bucket = self.buckets.get(name)
        if bucket is None:
            raise StorageError(f"Bucket not found: {name}")
        return bucket

    def _object_file(self, bucket: str, path: str) -> Path:
        self._bucket(bucket)
        key = PurePosixPath(path)
        if not path or key.is_absolute() or any(part in ("..", "") for part in path.split("/")):
            raise StorageError(f"Invalid object key: {path!r}")
        return self.root / bucket / Path(*key.parts)

    def exists(self, bucket: str, path: str) -> bool:
        return self._object_file(bucket, path).is_file()

    def upload(
        self,
        bucket: str,
        path: str,
        data: Union[bytes, BinaryIO],
        upsert: bool = False,
    ) -> str:
        """Store an object.

        Args:
            bucket: Target bucket name
            path: Object key inside the bucket
            data: File contents, as bytes or a readable binary file
            upsert: Overwrite an existing object at the same key

        Returns:
            The object key

        Raises:
            ObjectExistsError: If the key is taken and upsert is False
            StorageError: If the bucket is unknown or the write fails
        """
        target = self._object_file(bucket, path)
        if target.exists() and not upsert:
            raise ObjectExistsError(bucket, path)

        payload = data if isinstance(data, bytes) else data.read()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(payload)
                if not upsert and target.exists():
                    raise ObjectExistsError(bucket, path)
                os.replace(tmp_name, target)
            finally:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
        except OSError as e:
            logger.error(f"Error writing {bucket}/{path}: {str(e)}")
            raise StorageError(f"Upload failed: {e}") from e

        logger.info(f"Stored {bucket}/{path} ({len(payload)} bytes)")
        return path

    def remove(self, bucket: str, paths: List[str]) -> List[str]:
        """Delete objects, returning the keys that existed"""
        removed = []
        for path in paths:
            target = self._object_file(bucket, path)
            try:
                target.unlink()
                removed.append(path)
            except FileNotFoundError:
                continue
            except OSError as e:
                raise StorageError(f"Delete failed: {e}") from e
        return removed

    def open(self, bucket: str, path: str) -> Path:
        """Resolve an object to its file on disk"""
        target = self._object_file(bucket, path)
        if not target.is_file():
            raise StorageError("Object not found")
        return target

    def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket. Does not check existence."""
        if not self._bucket(bucket).public:
            raise StorageError(f"Bucket {bucket} is not public")
        return f"{self.public_url}/storage/v1/object/public/{bucket}/{quote(path)}"

    def create_signed_url(self, bucket: str, path: str, expires_in: int) -> str:
        """Create a time-limited URL for reading an object.

        Args:
            bucket: Bucket name
            path: Object key
            expires_in: Lifetime of the URL in seconds

        Raises:
            StorageError: If the object does not exist
        """
        if expires_in <= 0:
            raise StorageError("expires_in must be positive")
        if not self.exists(bucket, path):
            raise StorageError("Object not found")

        claims = {
            "url": f"{bucket}/{path}",
            "exp": datetime.now(UTC) + timedelta(seconds=expires_in),
        }
        token = jwt.encode(claims, self.secret, algorithm=self.algorithm)
        return f"{self.public_url}/storage/v1/object/sign/{bucket}/{quote(path)}?token={token}"

    def verify_signed_token(self, bucket: str, path: str, token: str) -> None:
        """Check a signed URL token against the object it is used for.

        Raises:
            StorageError: If the token is invalid, expired or for another object
        """
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise StorageError(f"Invalid signature: {e}") from e
        if claims.get("url") != f"{bucket}/{path}":
            raise StorageError("Invalid signature: token does not match object")
