"""
Request and response schemas for the REST API.

One module per API area. Fields whose absence must produce a 400 with a
specific message are declared optional and checked in the router.
"""
