"""Query assignment & collaboration FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assignflow.api.assignments import router as assignments_router
from assignflow.api.health import router as health_router
from assignflow.api.notifications import router as notifications_router
from assignflow.config import settings
from assignflow.dependencies import WorkflowDep

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="assignflow - Query Assignment & Collaboration",
    description="Hands warehouse query optimization tasks from FinOps to Data Engineers",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["Health"])
app.include_router(assignments_router, prefix="/v1", tags=["Assignments"])
app.include_router(notifications_router, prefix="/v1", tags=["Notifications"])


@app.get("/")
async def root(workflow: WorkflowDep):
    """Service summary: resolve policy and current queue sizes."""
    return {
        "service": "assignflow",
        "version": app.version,
        "requireOptimizedBeforeResolve": workflow.config.require_optimized_before_resolve,
        "assignments": len(workflow.list_assignments()),
        "unreadNotifications": workflow.unread_count(),
    }
