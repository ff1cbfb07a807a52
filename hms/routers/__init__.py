# Routers package
from . import auth_router
from . import appointments_router
from . import admins_router
from . import doctors_router
from . import patients_router

__all__ = [
    "auth_router",
    "appointments_router",
    "admins_router",
    "doctors_router",
    "patients_router",
]
