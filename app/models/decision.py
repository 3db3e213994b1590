from sqlalchemy import Column, String, DateTime, Integer, BigInteger, ForeignKey
from sqlalchemy.orm import relationship

from app.models.base import Base

class Decision(Base):
    """Model for enforcement decisions taken because of an alert."""
    
    __tablename__ = "decisions"
    
    id = Column(Integer, primary_key=True)
    alert_id = Column(Integer, ForeignKey("alerts.id", ondelete="CASCADE"), nullable=False, index=True)
    until = Column(DateTime, nullable=False, index=True)
    scenario = Column(String, nullable=False)
    decision_type = Column(String, nullable=False, index=True)
    
    # Inclusive integer interval of the targeted addresses
    source_ip_start = Column(BigInteger, nullable=False, index=True)
    source_ip_end = Column(BigInteger, nullable=False, index=True)
    
    source_value = Column(String, nullable=False)
    source_scope = Column(String, nullable=False)
    
    # Relationships
    alert = relationship("Alert", back_populates="decisions")
    
    def __repr__(self):
        return f"<Decision {self.decision_type} {self.source_scope}:{self.source_value} until {self.until}>"
