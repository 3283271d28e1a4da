from .reader import DecodeError, UploadData, read_upload

__all__ = [
    "DecodeError",
    "UploadData",
    "read_upload",
]
