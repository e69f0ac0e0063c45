from .base import Base
from .session import engine, SessionLocal
from .database import get_db, instantiate_db

__all__ = ['Base', 'engine', 'SessionLocal', 'get_db', 'instantiate_db']
