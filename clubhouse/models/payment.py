"""
Payment Model
Dues owed by a member
"""

from sqlalchemy import Column, String, Numeric, Date, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
from clubhouse.database import Base


class Payment(Base):
    __tablename__ = "payments"
    
    id = Column(String(36), primary_key=True)
    member_id = Column(String(36), ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    
    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    paid_date = Column(DateTime(timezone=True), nullable=True)
    
    # paid, pending, overdue
    status = Column(String(20), nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationship
    member = relationship("Member", backref="payments")
