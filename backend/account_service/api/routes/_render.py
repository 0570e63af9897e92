"""Shared route helper — HandlerResult → JSONResponse."""

from fastapi.responses import JSONResponse

from account_service.core.envelope import HandlerResult, render_result


def respond(result: HandlerResult) -> JSONResponse:
    status_code, body = render_result(result)
    return JSONResponse(status_code=status_code, content=body)
