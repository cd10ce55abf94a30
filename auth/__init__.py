"""auth/ -- Credentials, tokens and session holders for Taskboard.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from api/, web/, tasks/, or resolvers/.
api/ and resolvers/ import from auth/, not the other way around.
"""
