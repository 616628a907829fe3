"""
firehose_registrar.auth

Authentication package.

Responsibilities:
- Obtain the UAA admin token the registrar authenticates with.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The registrar depends only on the `TokenRefresher` protocol, never on UAA token
# endpoints directly.
