"""frontdeploy - build a static frontend and sync it to a server over SSH"""

__version__ = "1.0.0"
