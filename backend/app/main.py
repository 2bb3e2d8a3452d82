import logging
import os
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.endpoints import auth, projects, stock, profits, analytics, reports
from app.core.config import settings
from app.crud import crud_admin
from app.db.session import engine, Base, SessionLocal

# Setup logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create tables if they don't exist
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = SessionLocal()
    try:
        crud_admin.ensure_admin(db)
    finally:
        db.close()
    logger.info("%s is ready", settings.PROJECT_NAME)
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

@app.middleware("http")
async def catch_exceptions_middleware(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        logger.error(traceback.format_exc())
        content = {"detail": "Internal server error"}
        if settings.DEBUG:
            content["traceback"] = traceback.format_exc()
        return JSONResponse(status_code=500, content=content)
    logger.info("%s %s %s", request.method, request.url.path, response.status_code)
    return response

# CORS setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Adjust in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(stock.router, prefix="/api/stock", tags=["stock"])
app.include_router(profits.router, prefix="/api/profits", tags=["profits"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])
app.include_router(reports.router, prefix="/api/reports", tags=["reports"])

# Browser front end, when it is deployed next to the API
if os.path.isdir(settings.STATIC_DIR):
    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")


def _page(name: str):
    path = os.path.join(settings.STATIC_DIR, name)
    return FileResponse(path) if os.path.isfile(path) else None

@app.get("/login", include_in_schema=False)
def login_page():
    return _page("login.html") or JSONResponse(status_code=404, content={"detail": "Login page not deployed"})

@app.get("/")
def root():
    return _page("index.html") or {"message": f"Welcome to {settings.PROJECT_NAME} API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
