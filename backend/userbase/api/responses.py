"""Standard error body construction."""

from http import HTTPStatus

from fastapi.responses import JSONResponse


def error_body(status_code: int, message: str) -> dict:
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = "Error"
    return {"statusCode": status_code, "error": phrase, "message": message}


def error_response(
    status_code: int, message: str, headers: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, message),
        headers=headers,
    )
