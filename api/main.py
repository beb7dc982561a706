import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import router as auth_router
from babies import router as babies_router
from careservices import router as careservices_router
from core.db import Database, childcare_database_url, database_url
from core.errors import register_exception_handlers
from core.logging_config import RequestLoggingMiddleware, configure_logging
from documents import router as documents_router
from export import router as export_router
from feeding import router as feeding_router
from forum import router as forum_router
from growth import router as growth_router
from journal import router as journal_router
from lookups import router as lookups_router
from medical import router as medical_router
from milestones import router as milestones_router
from pictures import router as pictures_router
from reminders import router as reminders_router
from stool import router as stool_router
from users import router as users_router

VERSION = "0.1.0"
AUTHOR = "Team 06"
GITHUB_URL = "https://github.com/AnhChienVu/Team-06-PRJ666-Winter-2025"

configure_logging()


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per database per process; the childcare directory falls back to the main DB.
    db = Database.from_env(database_url())
    await db.connect()

    childcare_url = childcare_database_url()
    childcare_db = Database.from_env(childcare_url) if childcare_url else db
    if childcare_db is not db:
        await childcare_db.connect()

    app.state.db = db
    app.state.childcare_db = childcare_db
    try:
        yield
    finally:
        if childcare_db is not db:
            await childcare_db.close()
        await db.close()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "exportfilename", "ETag"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(auth_router.router, prefix="/v1", tags=["auth"])
app.include_router(users_router.router, prefix="/v1", tags=["users"])
app.include_router(babies_router.router, prefix="/v1", tags=["babies"])
app.include_router(feeding_router.router, prefix="/v1", tags=["feeding"])
app.include_router(growth_router.router, prefix="/v1", tags=["growth"])
app.include_router(milestones_router.router, prefix="/v1", tags=["milestones"])
app.include_router(stool_router.router, prefix="/v1", tags=["stool"])
app.include_router(reminders_router.router, prefix="/v1", tags=["reminders"])
app.include_router(journal_router.router, prefix="/v1", tags=["journal"])
app.include_router(forum_router.router, prefix="/v1", tags=["forum"])
app.include_router(lookups_router.router, prefix="/v1", tags=["lookups"])
app.include_router(medical_router.router, prefix="/v1", tags=["medical"])
app.include_router(documents_router.router, prefix="/v1", tags=["documents"])
app.include_router(careservices_router.router, prefix="/v1", tags=["care-services"])
app.include_router(pictures_router.router, prefix="/v1", tags=["pictures"])
app.include_router(export_router.router, prefix="/v1", tags=["export"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> JSONResponse:
    return JSONResponse(
        {"status": "ok", "author": AUTHOR, "githubUrl": GITHUB_URL, "version": VERSION},
        headers={"Cache-Control": "no-cache"},
    )
