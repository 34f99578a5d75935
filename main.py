# main.py
"""
Application entrypoint. Survey submission, grouping and export routers.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from classgroups.api.routers import exports, groups, students
from classgroups.config.logging_config import configure_logging
from classgroups.config.settings import settings
from classgroups.infrastructure.db.session import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    yield


app = FastAPI(title="Class Grouping Backend", lifespan=lifespan)

# Basic CORS (adjust origins in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routers
app.include_router(students.router, prefix="/api/v1/students", tags=["students"])
app.include_router(groups.router, prefix="/api/v1/groups", tags=["groups"])
app.include_router(exports.router, prefix="/api/v1/exports", tags=["exports"])


@app.get("/")
async def index():
    """Health / basic info endpoint."""
    return {"status": "ok", "service": "classgroups-backend", "env": settings.ENV}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
