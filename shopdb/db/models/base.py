"""Declarative base shared by all table definitions."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
