"""Application layer: definition loading, resolution, service façade and sync."""
from mp_appsec.application.service import ADMIN_DESCRIPTION, SecurityService

__all__ = ["ADMIN_DESCRIPTION", "SecurityService"]
