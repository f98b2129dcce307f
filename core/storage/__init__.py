from .object_store import (
    BOOKS_BUCKET,
    COVERS_BUCKET,
    Bucket,
    LocalObjectStore,
    make_object_path,
)

__all__ = [
    'BOOKS_BUCKET',
    'COVERS_BUCKET',
    'Bucket',
    'LocalObjectStore',
    'make_object_path',
]
