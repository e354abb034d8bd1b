"""
Content services - profile singleton, skills, projects and experiences in the document store
"""
from sqlalchemy.orm import Session

from portfolio.app.core.config import PROFILE_DOC_ID
from portfolio.app.core.logging_config import get_logger
from portfolio.app.models.experience import Experience
from portfolio.app.models.profile import Profile
from portfolio.app.models.project import Project
from portfolio.app.models.skill import Skill
from portfolio.app.schemas.content import (
    ExperiencePayload,
    PortfolioContent,
    ProfilePayload,
    ProjectPayload,
    SkillPayload,
    experience_model_to_payload,
    payload_to_experience_dict,
    payload_to_profile_dict,
    payload_to_project_dict,
    profile_model_to_payload,
    project_model_to_payload,
    skill_model_to_payload,
)

logger = get_logger("services.content")


class ProfileService:
    @staticmethod
    def get_profile(db: Session) -> Profile | None:
        return db.get(Profile, PROFILE_DOC_ID)

    @staticmethod
    def update_profile(db: Session, payload: ProfilePayload) -> Profile:
        """Write every non-null field of the payload; creates the singleton on first save."""
        profile = db.get(Profile, PROFILE_DOC_ID)
        if not profile:
            profile = Profile(id=PROFILE_DOC_ID)
            db.add(profile)
        for key, value in payload_to_profile_dict(payload).items():
            setattr(profile, key, value)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def set_photo(db: Session, photo_url: str) -> Profile:
        profile = db.get(Profile, PROFILE_DOC_ID)
        if not profile:
            profile = Profile(id=PROFILE_DOC_ID)
            db.add(profile)
        profile.photo_url = photo_url
        db.commit()
        db.refresh(profile)
        return profile


class SkillService:
    @staticmethod
    def list_skills(db: Session) -> list[Skill]:
        return db.query(Skill).all()

    @staticmethod
    def create_skill(db: Session, payload: SkillPayload) -> Skill:
        skill = Skill(name=payload.name.strip(), level=payload.level)
        db.add(skill)
        db.commit()
        db.refresh(skill)
        return skill

    @staticmethod
    def delete_skill(db: Session, skill_id: str) -> bool:
        skill = db.get(Skill, skill_id)
        if not skill:
            return False
        db.delete(skill)
        db.commit()
        return True


class ProjectService:
    @staticmethod
    def list_projects(db: Session) -> list[Project]:
        return db.query(Project).all()

    @staticmethod
    def get_by_slug(db: Session, slug: str) -> Project | None:
        return db.query(Project).filter(Project.slug == slug).first()

    @staticmethod
    def create_project(db: Session, payload: ProjectPayload) -> Project:
        project = Project(**payload_to_project_dict(payload))
        db.add(project)
        db.commit()
        db.refresh(project)
        if payload.isFeatured:
            project = ProjectService.set_featured(db, project.id)
        return project

    @staticmethod
    def update_project(db: Session, project_id: str, payload: ProjectPayload) -> Project | None:
        project = db.get(Project, project_id)
        if not project:
            return None
        for key, value in payload_to_project_dict(payload).items():
            setattr(project, key, value)
        db.commit()
        db.refresh(project)
        if payload.isFeatured and not project.is_featured:
            project = ProjectService.set_featured(db, project.id)
        return project

    @staticmethod
    def delete_project(db: Session, project_id: str) -> bool:
        project = db.get(Project, project_id)
        if not project:
            return False
        db.delete(project)
        db.commit()
        return True

    @staticmethod
    def set_featured(db: Session, project_id: str) -> Project | None:
        """
        Make project_id the only featured project. The unset and the set happen in
        one transaction, so readers never see zero or two featured projects.
        """
        project = db.get(Project, project_id)
        if not project:
            return None
        (
            db.query(Project)
            .filter(Project.is_featured.is_(True), Project.id != project_id)
            .update({Project.is_featured: False}, synchronize_session="fetch")
        )
        project.is_featured = True
        db.commit()
        db.refresh(project)
        logger.info("Featured project set project_id=%s", project_id)
        return project


class ExperienceService:
    @staticmethod
    def list_experiences(db: Session) -> list[Experience]:
        return db.query(Experience).order_by(Experience.order.desc()).all()

    @staticmethod
    def create_experience(db: Session, payload: ExperiencePayload) -> Experience:
        exp = Experience(**payload_to_experience_dict(payload))
        db.add(exp)
        db.commit()
        db.refresh(exp)
        return exp

    @staticmethod
    def update_experience(db: Session, exp_id: str, payload: ExperiencePayload) -> Experience | None:
        exp = db.get(Experience, exp_id)
        if not exp:
            return None
        for key, value in payload_to_experience_dict(payload).items():
            setattr(exp, key, value)
        db.commit()
        db.refresh(exp)
        return exp

    @staticmethod
    def delete_experience(db: Session, exp_id: str) -> bool:
        exp = db.get(Experience, exp_id)
        if not exp:
            return False
        db.delete(exp)
        db.commit()
        return True


def get_portfolio_content(db: Session) -> PortfolioContent:
    """Profile, projects, skills and experiences as payloads for pages and the chat prompt."""
    profile = ProfileService.get_profile(db)
    return PortfolioContent(
        profile=profile_model_to_payload(profile) if profile else None,
        projects=[project_model_to_payload(p) for p in ProjectService.list_projects(db)],
        skills=[skill_model_to_payload(s) for s in SkillService.list_skills(db)],
        experiences=[experience_model_to_payload(e) for e in ExperienceService.list_experiences(db)],
    )
