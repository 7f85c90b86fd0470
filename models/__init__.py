# backend/models/__init__.py
# This file simply re-exports the models so `import models` registers every table.
from .user import *
