from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Float, Boolean, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base

class Alert(Base):
    """Model for alerts submitted by machines."""
    
    __tablename__ = "alerts"
    
    id = Column(Integer, primary_key=True)
    scenario = Column(String, nullable=False, index=True)
    bucket_id = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    events_count = Column(Integer, nullable=False)
    started_at = Column(DateTime, nullable=False)
    stopped_at = Column(DateTime, nullable=False)
    
    # Denormalized source block
    source_scope = Column(String, nullable=False, index=True)
    source_value = Column(String, nullable=False, index=True)
    source_ip = Column(String, nullable=False, default="")
    source_range = Column(String, nullable=False, default="")
    source_as_number = Column(String, nullable=False, default="")
    source_as_name = Column(String, nullable=False, default="")
    source_country = Column(String, nullable=False, default="")
    source_latitude = Column(Float, nullable=False, default=0.0)
    source_longitude = Column(Float, nullable=False, default=0.0)
    
    # Originating leaky bucket
    capacity = Column(Integer, nullable=False)
    leak_speed = Column(Integer, nullable=False)
    reprocess = Column(Boolean, nullable=False, default=False)
    
    machine_id = Column(Integer, ForeignKey("machines.id"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    
    # Relationships
    owner = relationship("Machine", back_populates="alerts")
    events = relationship("Event", back_populates="alert", cascade="all, delete-orphan", order_by="Event.id")
    metas = relationship("Meta", back_populates="alert", cascade="all, delete-orphan", order_by="Meta.id")
    decisions = relationship("Decision", back_populates="alert", cascade="all, delete-orphan", order_by="Decision.id")
    
    __mapper_args__ = {"eager_defaults": True}
    
    @property
    def source(self):
        """The source columns grouped the way clients submit them."""
        return {
            "scope": self.source_scope,
            "value": self.source_value,
            "ip": self.source_ip,
            "range": self.source_range,
            "as_number": self.source_as_number,
            "as_name": self.source_as_name,
            "country": self.source_country,
            "latitude": self.source_latitude,
            "longitude": self.source_longitude,
        }
    
    def __repr__(self):
        return f"<Alert {self.scenario} ({self.source_scope}:{self.source_value})>"
