"""Dashboard users who sign in with credentials"""

from sqlalchemy import Column, String

from app.models.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # bcrypt hash
    password = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User {self.email}>"
