"""
BíbliaFS Server Package.

This package contains the web server implementation for BíbliaFS.
It includes the API definition, configuration, authentication and the
HTTP-facing glue around the domain services.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Core configuration and constants.
    exception_handlers: Application-wide exception handlers.
    middleware: Request monitoring middleware.
    services: Dependency providers for domain services.
"""
