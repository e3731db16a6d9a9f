"""Single-part multipart/form-data encoding for file uploads."""

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class MultipartBody:
    """An encoded single-part form body."""

    boundary: str
    header: bytes
    payload: bytes
    trailer: bytes

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def content(self) -> bytes:
        return self.header + self.payload + self.trailer

    def __len__(self) -> int:
        return len(self.header) + len(self.payload) + len(self.trailer)


# Characters that would end a quoted Content-Disposition parameter
_PARAM_ESCAPES = str.maketrans({"\"": "%22", "\r": "%0D", "\n": "%0A"})


def _quote_param(value: str) -> str:
    return value.translate(_PARAM_ESCAPES)


def encode_single_part(
    payload: bytes,
    content_type: str,
    name: str,
    filename: str,
    boundary: str | None = None,
) -> MultipartBody:
    """Wrap ``payload`` in one form-data part.

    Args:
        payload: Raw file bytes
        content_type: Media type of the payload
        name: Form field name
        filename: File name reported to the server
        boundary: Boundary token; a fresh random one when omitted

    Returns:
        The encoded body parts
    """
    boundary = boundary or str(uuid.uuid4())
    disposition = (
        f'form-data; name="{_quote_param(name)}"; filename="{_quote_param(filename)}"'
    )
    header = (
        f"\r\n--{boundary}\r\n"
        f"Content-Disposition: {disposition}\r\n"
        f"Content-Type: {content_type}\r\n\r\n"
    ).encode("utf-8")
    trailer = f"\r\n--{boundary}--\r\n".encode("ascii")
    return MultipartBody(
        boundary=boundary, header=header, payload=payload, trailer=trailer
    )
