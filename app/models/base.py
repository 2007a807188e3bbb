"""Base Model shared by all tables"""

import uuid
from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class BaseModel(Base):
    """
    Base model class with a server-generated UUID primary key.
    """
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
