# Schemas package (re-export feature modules for stable imports)
from .auth.auth import *
from .accounts.account import *
from .appointments.appointment import *
from .common.common import *
