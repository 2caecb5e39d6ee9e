"""FastAPI adapter: error mapping and protected-resource route dependency."""
from mp_appsec.adapters.fastapi.deps import require_resource_policy
from mp_appsec.adapters.fastapi.exception_mapper import SecurityExceptionMapper

__all__ = ["SecurityExceptionMapper", "require_resource_policy"]
