"""Declarative base for the project store tables."""
from sqlalchemy.orm import declarative_base


Base = declarative_base()
