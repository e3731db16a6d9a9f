"""Request dispatching and response normalization."""

from .dispatcher import HttpDispatcher
from .multipart import MultipartBody, encode_single_part
from .response import Response, status_name


__all__ = [
    "HttpDispatcher",
    "MultipartBody",
    "Response",
    "encode_single_part",
    "status_name",
]
