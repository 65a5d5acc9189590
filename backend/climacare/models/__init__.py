from .user import User
from .technician import Technician
from .machine import Machine
from .service import Service
from .service_history import ServiceHistory
__all__ = ["User", "Technician", "Machine", "Service", "ServiceHistory"]
