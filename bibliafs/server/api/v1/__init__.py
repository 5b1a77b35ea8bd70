"""Version 1 routers, all mounted under the API prefix."""
