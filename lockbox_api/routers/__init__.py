"""
Routers for the Lockbox app: ``auth`` for login and logout, ``files`` for
the upload, list, download and delete pages.
"""

from . import auth, files
