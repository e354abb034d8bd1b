from portfolio.app.models.profile import Profile
from portfolio.app.models.project import Project
from portfolio.app.models.skill import Skill
from portfolio.app.models.experience import Experience
from portfolio.app.models.chat import ChatSession, Message
