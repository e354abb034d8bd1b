"""
Admin CRUD endpoints - profile, skills, projects, experiences.
Every mutation drops the cached public portfolio payload.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portfolio.app.core.dependencies import get_current_admin, get_db
from portfolio.app.core.logging_config import get_logger
from portfolio.app.schemas.content import (
    ExperiencePayload,
    PhotoSelectIn,
    ProfilePayload,
    ProjectPayload,
    SkillPayload,
    experience_model_to_payload,
    profile_model_to_payload,
    project_model_to_payload,
    skill_model_to_payload,
)
from portfolio.app.services.content_service import (
    ExperienceService,
    ProfileService,
    ProjectService,
    SkillService,
)
from portfolio.app.utils import cache

logger = get_logger("api.admin.content")
router = APIRouter(dependencies=[Depends(get_current_admin)])


def _not_found(kind: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind} not found")


# --- Profile ---

@router.get("/profile", response_model=ProfilePayload | None)
def get_profile(db: Session = Depends(get_db)):
    """The singleton profile, or null before the first save."""
    profile = ProfileService.get_profile(db)
    return profile_model_to_payload(profile) if profile else None


@router.put("/profile", response_model=ProfilePayload)
async def update_profile(payload: ProfilePayload, db: Session = Depends(get_db)):
    profile = ProfileService.update_profile(db, payload)
    await cache.invalidate_portfolio()
    logger.info("Profile updated")
    return profile_model_to_payload(profile)


@router.patch("/profile/photo", response_model=ProfilePayload)
async def select_profile_photo(payload: PhotoSelectIn, db: Session = Depends(get_db)):
    profile = ProfileService.set_photo(db, payload.photoUrl)
    await cache.invalidate_portfolio()
    return profile_model_to_payload(profile)


# --- Skills ---

@router.get("/skills", response_model=list[SkillPayload])
def list_skills(db: Session = Depends(get_db)):
    return [skill_model_to_payload(s) for s in SkillService.list_skills(db)]


@router.post("/skills", response_model=SkillPayload, status_code=status.HTTP_201_CREATED)
async def create_skill(payload: SkillPayload, db: Session = Depends(get_db)):
    skill = SkillService.create_skill(db, payload)
    await cache.invalidate_portfolio()
    return skill_model_to_payload(skill)


@router.delete("/skills/{skill_id}")
async def delete_skill(skill_id: str, db: Session = Depends(get_db)) -> dict:
    if not SkillService.delete_skill(db, skill_id):
        raise _not_found("Skill")
    await cache.invalidate_portfolio()
    return {"ok": True}


# --- Projects ---

@router.get("/projects", response_model=list[ProjectPayload])
def list_projects(db: Session = Depends(get_db)):
    return [project_model_to_payload(p) for p in ProjectService.list_projects(db)]


@router.post("/projects", response_model=ProjectPayload, status_code=status.HTTP_201_CREATED)
async def create_project(payload: ProjectPayload, db: Session = Depends(get_db)):
    project = ProjectService.create_project(db, payload)
    await cache.invalidate_portfolio()
    return project_model_to_payload(project)


@router.put("/projects/{project_id}", response_model=ProjectPayload)
async def update_project(project_id: str, payload: ProjectPayload, db: Session = Depends(get_db)):
    project = ProjectService.update_project(db, project_id, payload)
    if not project:
        raise _not_found("Project")
    await cache.invalidate_portfolio()
    return project_model_to_payload(project)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: str, db: Session = Depends(get_db)) -> dict:
    if not ProjectService.delete_project(db, project_id):
        raise _not_found("Project")
    await cache.invalidate_portfolio()
    return {"ok": True}


@router.post("/projects/{project_id}/featured", response_model=ProjectPayload)
async def set_featured_project(project_id: str, db: Session = Depends(get_db)):
    """Make this the single featured project."""
    project = ProjectService.set_featured(db, project_id)
    if not project:
        raise _not_found("Project")
    await cache.invalidate_portfolio()
    return project_model_to_payload(project)


# --- Experiences ---

@router.get("/experiences", response_model=list[ExperiencePayload])
def list_experiences(db: Session = Depends(get_db)):
    return [experience_model_to_payload(e) for e in ExperienceService.list_experiences(db)]


@router.post("/experiences", response_model=ExperiencePayload, status_code=status.HTTP_201_CREATED)
async def create_experience(payload: ExperiencePayload, db: Session = Depends(get_db)):
    exp = ExperienceService.create_experience(db, payload)
    await cache.invalidate_portfolio()
    return experience_model_to_payload(exp)


@router.put("/experiences/{exp_id}", response_model=ExperiencePayload)
async def update_experience(exp_id: str, payload: ExperiencePayload, db: Session = Depends(get_db)):
    exp = ExperienceService.update_experience(db, exp_id, payload)
    if not exp:
        raise _not_found("Experience")
    await cache.invalidate_portfolio()
    return experience_model_to_payload(exp)


@router.delete("/experiences/{exp_id}")
async def delete_experience(exp_id: str, db: Session = Depends(get_db)) -> dict:
    if not ExperienceService.delete_experience(db, exp_id):
        raise _not_found("Experience")
    await cache.invalidate_portfolio()
    return {"ok": True}
