"""
Rule Model
Bylaws, shown to every logged-in role
"""

from sqlalchemy import Column, String, Integer, DateTime, Text, func
from clubhouse.database import Base


class Rule(Base):
    __tablename__ = "rules"
    
    id = Column(String(36), primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default="general", index=True)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
