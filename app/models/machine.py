from sqlalchemy import Column, String, DateTime, Integer, Boolean, func
from sqlalchemy.orm import relationship

from app.models.base import Base

class Machine(Base):
    """Model for the upstream agents that submit alerts."""
    
    __tablename__ = "machines"
    
    id = Column(Integer, primary_key=True)
    machine_id = Column(String, unique=True, index=True, nullable=False)
    ip_address = Column(String, nullable=True)
    version = Column(String, nullable=True)
    is_validated = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    
    # Relationships
    alerts = relationship("Alert", back_populates="owner")
    
    __mapper_args__ = {"eager_defaults": True}
    
    def __repr__(self):
        return f"<Machine {self.machine_id}>"
