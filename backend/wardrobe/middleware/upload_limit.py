"""
Wardrobe Backend — Upload Size Limit Middleware
================================================

What:  Rejects oversized garment uploads with 413 before the body is read.
How:   Compares the `Content-Length` header of `POST /garments` with
       MAX_UPLOAD_SIZE plus a small allowance for the multipart envelope
       (boundaries, part headers, the name and logical_type fields).

Requests without a Content-Length (chunked) pass through; the route checks
the size of the file it actually received and raises PayloadTooLargeError.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from wardrobe.exceptions import PayloadTooLargeError
from wardrobe.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

MULTIPART_OVERHEAD = 64 * 1024

UPLOAD_PATHS = {"/garments", "/garments/"}


class UploadLimitMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, max_upload_size: int):
        super().__init__(app)
        self.max_upload_size = max_upload_size

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "POST" and request.url.path in UPLOAD_PATHS:
            declared = request.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > self.max_upload_size + MULTIPART_OVERHEAD:
                error = PayloadTooLargeError(max_size=self.max_upload_size)
                logger.warning(
                    "[%s] Upload rejected: Content-Length %s exceeds %d",
                    request_id_var.get(""), declared, self.max_upload_size,
                )
                return JSONResponse(
                    status_code=error.status_code,
                    content={"message": error.message},
                )
        return await call_next(request)
