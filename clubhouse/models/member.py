"""
Member Model
Club roster profile, at most one per user
"""

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from clubhouse.database import Base


class Member(Base):
    __tablename__ = "members"
    
    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    
    # Profile
    road_name = Column(String(100), nullable=False, index=True)
    real_name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    
    # Admin eyes only
    emergency_contact = Column(String(255), nullable=True)
    
    join_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Relationship
    user = relationship("User", backref="member", uselist=False)
