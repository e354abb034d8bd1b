from sqlalchemy import Column, Integer, String

from portfolio.app.db.base import Base
from portfolio.app.utils.ids import new_id


class Skill(Base):
    __tablename__ = "skills"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(120), nullable=False)
    level = Column(Integer, nullable=True)  # 0-100, display only
