"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from portfolio.app.api.v1.admin import content as admin_content
from portfolio.app.api.v1.admin import conversations as admin_conversations
from portfolio.app.api.v1.admin import photos as admin_photos
from portfolio.app.api.v1.chat import routes as chat_routes
from portfolio.app.api.v1.chat import sessions as chat_sessions
from portfolio.app.api.v1.public import routes as public_routes
from portfolio.app.core.config import settings
from portfolio.app.core.logging_config import setup_logging
from portfolio.app.db.base import Base
from portfolio.app.db.session import engine
from portfolio.app.utils import cache

# Import models so they register with Base.metadata
import portfolio.app.models  # noqa: F401

logger = setup_logging()

# Tables are created on boot for the SQLite default; Alembic owns real deployments
try:
    Base.metadata.create_all(bind=engine)
except SQLAlchemyError as e:
    logger.error("Table creation failed database_url=%s error=%s", settings.database_url.split("@")[-1], e)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    await cache.connect()
    yield
    await cache.close()


# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Portfolio content, admin dashboard and chat assistant API",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(chat_routes.router, prefix="/api/chat", tags=["chat"])
app.include_router(chat_sessions.router, prefix="/api/chat/sessions", tags=["chat-sessions"])
app.include_router(public_routes.router, prefix="/api", tags=["portfolio"])
app.include_router(admin_content.router, prefix="/api/admin", tags=["admin"])
app.include_router(admin_conversations.router, prefix="/api/admin/conversations", tags=["admin"])
app.include_router(admin_photos.router, prefix="/api/admin/photos", tags=["admin"])


@app.get("/")
def read_root():
    """Root endpoint"""
    return {"message": f"{settings.app_name} API", "version": settings.app_version}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
