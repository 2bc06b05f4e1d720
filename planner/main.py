"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from planner.config import settings
from planner.database import database
from planner.log import configure_logging
from planner.routers import auth, catalog, finance, goals, wizard

configure_logging(settings.debug)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    await database.connect()
    yield
    await database.disconnect()


app = FastAPI(
    title="Goal Planner API",
    description="Goal tracking, progress and auto-plan engine",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(goals.router)
app.include_router(catalog.router)
app.include_router(wizard.router)
app.include_router(finance.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "Goal Planner API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
