"""
Builder module exposing tag tables and compilation over HTTP.
"""

from .services import BuilderWebService
from .routes import create_builder_routes
from .factory import create_builder_module

__all__ = ['BuilderWebService', 'create_builder_routes', 'create_builder_module']
