# grocery/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from grocery.api import include_routers
from grocery.data.database import Base, init_db
from grocery.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")
    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # bledy walidacji wejscia to 400, nie domyslne 422
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Grocery Portal API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    include_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
