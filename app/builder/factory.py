"""
Factory for creating the builder module.
"""
from builder_service import BuilderService
from .services import BuilderWebService
from .routes import create_builder_routes


def create_builder_module(builder: BuilderService, manifest_url: str, output_name: str = "umbra.js", postprocess_defaults=None) -> dict:
    """
    Create the builder module with all its components.

    Args:
        builder: BuilderService that loads and compiles sources
        manifest_url: Location of the version manifest
        output_name: File name offered for compiled downloads
        postprocess_defaults: Object with ``minify``/``format`` defaults

    Returns:
        Dictionary containing:
            - service: BuilderWebService instance
            - blueprint: Flask blueprint for routes
    """
    service = BuilderWebService(builder, manifest_url, output_name)
    blueprint = create_builder_routes(service, postprocess_defaults)

    return {
        "service": service,
        "blueprint": blueprint
    }
