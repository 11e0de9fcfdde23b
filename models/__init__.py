# =============================================================================
# 📦 models/__init__.py
# =============================================================================

from .prospect import Prospect, ProspectRecord

__all__ = [
    "Prospect",
    "ProspectRecord",
]
