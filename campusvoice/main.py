import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from campusvoice.core.config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT
from campusvoice.core.database import create_db_and_tables
from campusvoice.core.errors import (
    CampusVoiceError,
    campusvoice_error_handler,
    request_validation_error_handler,
)
from campusvoice.routes import admin, auth, complaints

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield

app = FastAPI(title="CampusVoice", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(CampusVoiceError, campusvoice_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

app.include_router(complaints.router, prefix="/api")
app.include_router(admin.router, prefix="/api/admin")
app.include_router(auth.router, prefix="/api")

@app.get("/", tags=["Test"])
def root():
    return {"message": "CampusVoice API running"}


def run():
    """Serve the API with uvicorn (``campusvoice`` or ``python -m campusvoice``)."""
    uvicorn.run("campusvoice.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
