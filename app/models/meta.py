from sqlalchemy import Column, String, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.models.base import Base

class Meta(Base):
    """Model for key/value annotations attached to an alert."""
    
    __tablename__ = "metas"
    
    id = Column(Integer, primary_key=True)
    alert_id = Column(Integer, ForeignKey("alerts.id", ondelete="CASCADE"), nullable=False, index=True)
    key = Column(String, nullable=False, index=True)
    value = Column(Text, nullable=False, default="")
    
    # Relationships
    alert = relationship("Alert", back_populates="metas")
    
    def __repr__(self):
        return f"<Meta {self.key}={self.value}>"
