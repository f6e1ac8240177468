"""Evidence Manager - API Routes"""

from .cases import router as cases_router
from .evidence import router as evidence_router
from .officers import router as officers_router


__all__ = [
    "cases_router",
    "evidence_router",
    "officers_router",
]
