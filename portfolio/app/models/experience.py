"""
Experience document - timeline entries sorted by `order`
"""
from sqlalchemy import JSON, Column, Integer, String, Text

from portfolio.app.db.base import Base
from portfolio.app.utils.ids import new_id


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(String(36), primary_key=True, default=new_id)

    title = Column(String(255), nullable=False)
    company = Column(String(255), default="")
    logo = Column(String(1024), nullable=True)
    location = Column(String(255), default="")
    start_date = Column(String(64), default="")
    end_date = Column(String(64), default="")
    description = Column(Text, default="")
    technologies = Column(JSON, default=list)
    order = Column(Integer, default=0, index=True)
