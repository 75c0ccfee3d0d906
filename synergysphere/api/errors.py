from fastapi.responses import JSONResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    """Тело ошибки API: {"error": "..."}"""
    return JSONResponse(status_code=status_code, content={"error": message})
