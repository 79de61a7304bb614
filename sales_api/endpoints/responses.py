"""Response envelope helpers shared by the routers."""
from typing import Any

from fastapi import Response, status

from sales_api.schemas.common import ApiResponse, ErrorResponse

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
}


def envelope(response: Response, data: Any) -> ApiResponse:
    """
    Wrap a payload in the success envelope.

    A missing resource is not an error: it is answered with 202 and a null
    payload so clients can tell it apart from a 200 with data.
    """
    if data is None:
        response.status_code = status.HTTP_202_ACCEPTED
    return ApiResponse(data=data)
