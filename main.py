import logging
import math

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from config import get_settings
from db import DatabaseDep, create_client, ensure_indexes
from routers import (
    adoption_requests,
    auth,
    campaigns,
    donations,
    payments,
    pets,
    stats,
    users,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("paw_hope")

app = FastAPI(title="Paw Hope")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    client = create_client()
    app.state.mongo_client = client
    app.state.db = client[settings.db_name]
    ensure_indexes(app.state.db)
    logger.info("Paw Hope is running on port %s", settings.port)


@app.on_event("shutdown")
def on_shutdown() -> None:
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        logger.info("Mongo client closed")


def _json_safe(value):
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # NaN/Infinity inputs are echoed back and have no JSON form
    errors = _json_safe(jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=422, content={"detail": errors})


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/")
def read_root():
    return {"message": "Paw Hope server is running"}


@app.get("/health")
def health(db: DatabaseDep):
    response = {
        "backend": "running",
        "database": "unavailable",
        "collections": [],
    }
    try:
        db.command("ping")
        response["database"] = "connected"
        response["collections"] = sorted(db.list_collection_names())
    except PyMongoError as e:
        response["database"] = f"error: {str(e)[:80]}"
    return response


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(pets.router)
app.include_router(adoption_requests.router)
app.include_router(campaigns.router)
app.include_router(donations.router)
app.include_router(payments.router)
app.include_router(stats.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
