"""
User Model
Login identities and their role
"""

from sqlalchemy import Column, String, DateTime, func
from clubhouse.database import Base


class User(Base):
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    
    # admin, member, prospect, hangaround, guest
    role = Column(String(20), nullable=False, default="guest")
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
