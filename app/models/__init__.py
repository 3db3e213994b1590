from app.models.base import Base
from app.models.machine import Machine
from app.models.alert import Alert
from app.models.event import Event
from app.models.meta import Meta
from app.models.decision import Decision
