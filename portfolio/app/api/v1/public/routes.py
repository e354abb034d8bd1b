"""
Public read endpoints - everything the portfolio pages render.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.app.core.dependencies import get_db
from portfolio.app.schemas.content import PortfolioContent, ProjectPayload, project_model_to_payload
from portfolio.app.services.content_service import ProjectService, get_portfolio_content
from portfolio.app.utils import cache

router = APIRouter()


@router.get("/portfolio", response_model=PortfolioContent)
async def get_portfolio(db: Session = Depends(get_db)):
    """Profile, projects, skills and experiences in one payload; served from Redis when warm."""
    cached = await cache.cached_portfolio()
    if cached is not None:
        return cached
    content = get_portfolio_content(db)
    await cache.store_portfolio(content.model_dump())
    return content


@router.get("/projects/{slug}", response_model=ProjectPayload)
def get_project(slug: str, db: Session = Depends(get_db)):
    project = ProjectService.get_by_slug(db, slug)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project_model_to_payload(project)
