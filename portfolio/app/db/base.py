"""
Declarative base shared by all document-store models
"""
from sqlalchemy.orm import declarative_base

Base = declarative_base()
