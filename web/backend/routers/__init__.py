"""API route handlers."""

from .outcomes import router as outcomes_router
from .recommendations import router as recommendations_router
