"""Evidence Manager - Envelope to HTTP mapping
The single table used by every route to pick a status code.
"""

from fastapi import Response, status
from fastapi.responses import JSONResponse

from core.responses import BaseResponse, ResponseMessage


FAILURE_STATUS: dict[ResponseMessage, int] = {
    ResponseMessage.CASE_DONT_EXISTS: status.HTTP_404_NOT_FOUND,
    ResponseMessage.EVIDENCE_DONT_EXISTS: status.HTTP_404_NOT_FOUND,
    ResponseMessage.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ResponseMessage.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ResponseMessage.USER_IS_NOT_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
}


def status_for(
    response: BaseResponse,
    success_status: int = status.HTTP_200_OK,
    fallback_status: int = status.HTTP_400_BAD_REQUEST,
) -> int:
    """Status code for an envelope.

    ``fallback_status`` applies to failures the table does not name.
    """
    if response.success:
        return success_status
    return FAILURE_STATUS.get(response.message, fallback_status)


def to_response(
    response: BaseResponse,
    success_status: int = status.HTTP_200_OK,
    fallback_status: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    """Render an envelope; 204 responses carry no body."""
    code = status_for(response, success_status, fallback_status)

    if code == status.HTTP_204_NO_CONTENT:
        return Response(status_code=code)

    return JSONResponse(status_code=code, content=response.model_dump(mode="json"))


def envelope_content(message: ResponseMessage, errors: list[str] | None = None) -> dict:
    """JSON body of a failure envelope raised outside a use case."""
    return BaseResponse.fail(message, errors).model_dump(mode="json")
