"""
Profile document - singleton (id "main") read by every public page
"""
from sqlalchemy import Column, String, Text

from portfolio.app.core.config import PROFILE_DOC_ID
from portfolio.app.db.base import Base


class Profile(Base):
    __tablename__ = "profile"

    id = Column(String(36), primary_key=True, default=PROFILE_DOC_ID)

    name = Column(String(120), default="")
    title = Column(String(120), default="")
    photo_url = Column(String(1024), default="")
    about = Column(Text, default="")

    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)

    twitter_url = Column(String(512), nullable=True)
    linkedin_url = Column(String(512), nullable=True)
    github_url = Column(String(512), nullable=True)
    instagram_url = Column(String(512), nullable=True)
