"""
Synapse Reader API - FastAPI application entry point
Local backend for an AI-assisted PDF reader
"""

import logging

# Configure logging to show INFO level
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s"
)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from synapse_reader.config import settings
from synapse_reader.database import create_tables, engine
from synapse_reader.migrations import get_schema_version
from synapse_reader.utils.error_handlers import setup_error_handlers

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="AI-assisted PDF reading companion",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "documents", "description": "Documents opened in the reader"},
        {"name": "interactions", "description": "AI query history and activity"},
        {"name": "concepts", "description": "Concept graph and extraction"},
        {"name": "reviews", "description": "Spaced repetition"},
        {"name": "highlights", "description": "Text highlights and notes"},
        {"name": "bookmarks", "description": "Page bookmarks"},
        {"name": "conversations", "description": "Persistent AI conversations"},
        {"name": "workspaces", "description": "Multi-document workspaces"},
        {"name": "search", "description": "Full-text search"},
        {"name": "ai", "description": "Streaming AI queries"},
        {"name": "providers", "description": "LLM providers and API keys"},
        {"name": "terms", "description": "Technical term detection"}
    ]
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app)


@app.on_event("startup")
async def startup_event():
    """Create or repair the schema on startup"""
    create_tables()
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} started")
    logger.info(f"Database: {settings.DATABASE_URL}")
    logger.info(f"API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Detailed health check"""
    with engine.connect() as connection:
        schema_version = get_schema_version(connection)
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "database": "connected",
        "schema_version": schema_version
    }


# Import and register routers
from synapse_reader.api import (  # noqa: E402
    documents,
    interactions,
    concepts,
    reviews,
    highlights,
    bookmarks,
    conversations,
    workspaces,
    search,
    ai,
    providers,
    terms,
)

app.include_router(documents.router, prefix="/api/v1")
app.include_router(interactions.router, prefix="/api/v1")
app.include_router(concepts.router, prefix="/api/v1")
app.include_router(reviews.router, prefix="/api/v1")
app.include_router(highlights.router, prefix="/api/v1")
app.include_router(bookmarks.router, prefix="/api/v1")
app.include_router(conversations.router, prefix="/api/v1")
app.include_router(workspaces.router, prefix="/api/v1")
app.include_router(search.router, prefix="/api/v1")
app.include_router(ai.router, prefix="/api/v1")
app.include_router(providers.router, prefix="/api/v1")
app.include_router(terms.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "synapse_reader.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
