"""Dependency providers wiring domain services into the routers."""
