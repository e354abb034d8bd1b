"""
Portfolio content Pydantic schemas - camelCase payloads as consumed by the frontend
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from portfolio.app.core.config import DEFAULT_PROJECT_ICON, PROJECT_ICONS


def normalize_icon(name: str | None) -> str:
    """Map a stored icon name onto the closed icon set; unknown names get the default."""
    key = (name or "").strip().lower()
    return key if key in PROJECT_ICONS else DEFAULT_PROJECT_ICON


class ProfilePayload(BaseModel):
    name: str = ""
    title: str = ""
    photoURL: str = ""
    about: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    twitterURL: Optional[str] = None
    linkedinURL: Optional[str] = None
    githubURL: Optional[str] = None
    instagramURL: Optional[str] = None

    model_config = {"extra": "ignore"}


class ProjectPayload(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: str = ""
    coverPhoto: str = ""
    buttonLink: Optional[str] = None
    buttonType: Optional[str] = None
    slug: Optional[str] = None
    link: Optional[str] = None
    icon: str = DEFAULT_PROJECT_ICON
    color: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    date: Optional[str] = None
    isFeatured: bool = False
    inCarousel: bool = False

    model_config = {"extra": "ignore"}

    @field_validator("icon", mode="before")
    @classmethod
    def _known_icon(cls, v):
        return normalize_icon(v)


class SkillPayload(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    level: Optional[int] = Field(None, ge=0, le=100)


class ExperiencePayload(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    company: str = ""
    logo: Optional[str] = None
    location: str = ""
    startDate: str = ""
    endDate: str = ""
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    order: int = 0

    model_config = {"extra": "ignore"}


class PhotoSelectIn(BaseModel):
    photoUrl: str


class PortfolioContent(BaseModel):
    """Everything the public pages (and the chat system prompt) need."""
    profile: Optional[ProfilePayload] = None
    projects: List[ProjectPayload] = Field(default_factory=list)
    skills: List[SkillPayload] = Field(default_factory=list)
    experiences: List[ExperiencePayload] = Field(default_factory=list)


# --- Model <-> payload converters ---

def profile_model_to_payload(profile) -> ProfilePayload:
    return ProfilePayload(
        name=profile.name or "",
        title=profile.title or "",
        photoURL=profile.photo_url or "",
        about=profile.about or "",
        email=profile.email,
        phone=profile.phone,
        twitterURL=profile.twitter_url,
        linkedinURL=profile.linkedin_url,
        githubURL=profile.github_url,
        instagramURL=profile.instagram_url,
    )


def payload_to_profile_dict(payload: ProfilePayload) -> dict:
    """Convert ProfilePayload to DB model kwargs, dropping unset (None) fields."""
    data = {
        "name": payload.name,
        "title": payload.title,
        "photo_url": payload.photoURL,
        "about": payload.about,
        "email": payload.email,
        "phone": payload.phone,
        "twitter_url": payload.twitterURL,
        "linkedin_url": payload.linkedinURL,
        "github_url": payload.githubURL,
        "instagram_url": payload.instagramURL,
    }
    return {k: v for k, v in data.items() if v is not None}


def project_model_to_payload(project) -> ProjectPayload:
    return ProjectPayload(
        id=project.id,
        name=project.name,
        description=project.description or "",
        coverPhoto=project.cover_photo or "",
        buttonLink=project.button_link,
        buttonType=project.button_type,
        slug=project.slug,
        link=project.link,
        icon=project.icon,
        color=project.color,
        tags=project.tags or [],
        date=project.date,
        isFeatured=bool(project.is_featured),
        inCarousel=bool(project.in_carousel),
    )


def payload_to_project_dict(payload: ProjectPayload) -> dict:
    return {
        "name": payload.name,
        "description": payload.description,
        "cover_photo": payload.coverPhoto,
        "button_link": payload.buttonLink,
        "button_type": payload.buttonType,
        "slug": payload.slug,
        "link": payload.link,
        "icon": payload.icon,
        "color": payload.color,
        "tags": list(payload.tags),
        "date": payload.date,
        "in_carousel": payload.inCarousel,
    }


def skill_model_to_payload(skill) -> SkillPayload:
    return SkillPayload(id=skill.id, name=skill.name, level=skill.level)


def experience_model_to_payload(exp) -> ExperiencePayload:
    return ExperiencePayload(
        id=exp.id,
        title=exp.title,
        company=exp.company or "",
        logo=exp.logo,
        location=exp.location or "",
        startDate=exp.start_date or "",
        endDate=exp.end_date or "",
        description=exp.description or "",
        technologies=exp.technologies or [],
        order=exp.order or 0,
    )


def payload_to_experience_dict(payload: ExperiencePayload) -> dict:
    return {
        "title": payload.title,
        "company": payload.company,
        "logo": payload.logo,
        "location": payload.location,
        "start_date": payload.startDate,
        "end_date": payload.endDate,
        "description": payload.description,
        "technologies": list(payload.technologies),
        "order": payload.order,
    }
