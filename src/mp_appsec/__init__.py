"""
mp_appsec: Application security policy engine.

Import path convention::

    from mp_appsec.kernel.errors import ResourceDeniedError
    from mp_appsec.kernel.security import ResourceType, ProtectedResource, Policy
    from mp_appsec.application.definition import DefinitionLoader
    from mp_appsec.application.resolution import compile_user_policy, resolve
    from mp_appsec.application import SecurityService
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
