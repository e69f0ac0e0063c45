"""SQLAlchemy models for the project store and saved connections."""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base


class ProjectRecord(Base):
    """An imported project."""
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    encoding = Column(String(50), nullable=False, default="UTF-8")
    source = Column(String(255), nullable=True)
    columns = Column(JSON, nullable=False)  # Ordered column names
    row_count = Column(Integer, default=0)

    # Timestamps
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    rows = relationship(
        "ProjectRowRecord",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectRowRecord.row_index"
    )


class ProjectRowRecord(Base):
    """One row of an imported project."""
    __tablename__ = "project_rows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String(36), ForeignKey('projects.id', ondelete='CASCADE'), nullable=False)
    row_index = Column(Integer, nullable=False)
    cells = Column(JSON, nullable=False)

    project = relationship("ProjectRecord", back_populates="rows")

    __table_args__ = (
        Index('idx_project_row', 'project_id', 'row_index'),
    )


class SavedConnection(Base):
    """A named database connection; the password is stored encrypted."""
    __tablename__ = "saved_connections"

    id = Column(String(36), primary_key=True)
    connection_name = Column(String(255), nullable=False, unique=True)
    database_type = Column(String(50), nullable=False)
    database_host = Column(String(255), nullable=True)
    database_port = Column(Integer, default=0)
    database_user = Column(String(255), nullable=True)
    password_encrypted = Column(Text, nullable=True)
    database_name = Column(String(255), nullable=True)
    database_schema = Column(String(255), nullable=True)
    use_ssl = Column(Boolean, default=False)

    # Timestamps
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
