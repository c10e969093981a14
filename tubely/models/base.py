"""
Base model classes
"""

import uuid

from sqlalchemy import Column, DateTime, Uuid, func

from tubely.core.database import Base


class BaseModel(Base):
    __abstract__ = True

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
