from typing import Any, Optional
from fastapi.responses import JSONResponse


def api_response(status_code: int, message: str, data: Any = None, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "message": message,
            "data": data if data is not None else {},
            "success": status_code < 400,
        },
        headers=headers,
    )
