"""HTTP surface: Flask app exposing IPMI queries as JSON endpoints."""

from ipmiserver.api.app import create_app
from ipmiserver.api.routes import ipmi_bp

__all__ = [
    "create_app",
    "ipmi_bp",
]
