from sqlalchemy.orm import declarative_base

Base = declarative_base()
"""Declarative base shared by every entity; `Base.metadata` creates the schema."""
