from sqlalchemy import Column, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.models.base import Base

class Event(Base):
    """Model for the raw events that triggered an alert."""
    
    __tablename__ = "events"
    
    id = Column(Integer, primary_key=True)
    alert_id = Column(Integer, ForeignKey("alerts.id", ondelete="CASCADE"), nullable=False, index=True)
    time = Column(DateTime, nullable=False, index=True)
    
    # Opaque payload, format owned by the detection pipeline
    serialized = Column(Text, nullable=False)
    
    # Relationships
    alert = relationship("Alert", back_populates="events")
    
    def __repr__(self):
        return f"<Event alert={self.alert_id} at {self.time}>"
