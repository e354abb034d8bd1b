"""
Project document - at most one row should carry is_featured=True
"""
from sqlalchemy import JSON, Boolean, Column, String, Text

from portfolio.app.db.base import Base
from portfolio.app.utils.ids import new_id


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)

    name = Column(String(255), nullable=False)
    description = Column(Text, default="")  # rich text (HTML/markdown)
    cover_photo = Column(String(1024), default="")
    button_link = Column(String(1024), nullable=True)
    button_type = Column(String(50), nullable=True)  # e.g. "github", "live"
    slug = Column(String(255), nullable=True, index=True)
    link = Column(String(1024), nullable=True)
    icon = Column(String(50), nullable=True)
    color = Column(String(50), nullable=True)
    tags = Column(JSON, default=list)
    date = Column(String(64), nullable=True)

    is_featured = Column(Boolean, default=False, nullable=False)
    in_carousel = Column(Boolean, default=False, nullable=False)
