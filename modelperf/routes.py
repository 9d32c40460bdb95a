from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .api.model_routes import router as model_router
from .errors import bad_request
from .logging_config import logger


class HealthResponse(BaseModel):
    status: str = "ok"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    error = bad_request(
        "Invalid request parameters",
        details={
            "errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]
        },
    )
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


def create_app() -> FastAPI:
    app = FastAPI(title="Model Performance API", version="0.1.0")
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse()

    app.include_router(model_router)
    return app
