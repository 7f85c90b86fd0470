from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.logger import init_logger

error_logger = init_logger("validation-errors")


def to_error_descriptor(error: dict) -> dict:
    """Flatten one pydantic error into {type, value, msg, path, location}."""
    loc = error.get("loc") or ("body",)
    return {
        "type": "field",
        "value": error.get("input"),
        "msg": error.get("msg", "Invalid value"),
        "path": ".".join(str(part) for part in loc[1:]),
        "location": str(loc[0]),
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [to_error_descriptor(error) for error in exc.errors()]
    error_logger.info(f"Rejected {request.method} {request.url.path} with {len(errors)} validation error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"errors": errors}),
    )
