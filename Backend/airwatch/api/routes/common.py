"""
Helpers shared by the API routers
"""
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from airwatch.api.facade import BAD_REQUEST, NOT_FOUND
from airwatch.models.schemas import ApiResponse

ERROR_STATUS_CODES = {
    NOT_FOUND: 404,
    BAD_REQUEST: 400,
}


def to_http(response: ApiResponse):
    """Pass successful envelopes through; send failed ones with a matching HTTP status"""
    if response.success:
        return response
    status_code = ERROR_STATUS_CODES.get(response.error.code, 500)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(response))
