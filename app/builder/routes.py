"""
Builder routes for listing versions and tags and compiling scripts.
"""
import logging
from flask import Blueprint, request, jsonify, Response

from builder_service import FetchError, ManifestError, TransformError
from .models import CompileRequest
from .services import BuilderWebService

_LOG = logging.getLogger(__name__)


def create_builder_routes(web_service: BuilderWebService, postprocess_defaults=None) -> Blueprint:
    """Create builder routes."""
    bp = Blueprint('builder', __name__, url_prefix='/builder')
    default_minify = bool(getattr(postprocess_defaults, "minify", False))
    default_format = bool(getattr(postprocess_defaults, "format", False))

    @bp.route("/versions", methods=["GET"])
    def list_versions():
        """List buildable versions from the manifest."""
        try:
            return jsonify({"versions": web_service.list_versions()})
        except (FetchError, ManifestError) as exc:
            _LOG.error("Failed to load manifest: %s", exc)
            return jsonify({"error": "manifest-unavailable", "message": str(exc)}), 502

    @bp.route("/tags", methods=["GET"])
    def list_tags():
        """List the tags of a source with descriptions and measured sizes."""
        source = request.args.get("source", "").strip()
        version = request.args.get("version", "").strip()
        if not source and not version:
            return jsonify({"error": "bad-request", "message": "source or version is required"}), 400

        try:
            source = web_service.resolve_source(source, version)
            return jsonify({"source": source, "tags": web_service.get_tags(source)})
        except LookupError as exc:
            return jsonify({"error": "not-found", "message": str(exc)}), 404
        except (FetchError, ManifestError) as exc:
            _LOG.error("Failed to load source: %s", exc)
            return jsonify({"error": "source-unavailable", "message": str(exc)}), 502

    @bp.route("/compile", methods=["POST"])
    def compile_script():
        """Compile a source for the selected tags and return it as a download."""
        try:
            compile_request = CompileRequest.from_json(
                request.get_json(silent=True), minify=default_minify, format=default_format
            )
        except ValueError as exc:
            return jsonify({"error": "bad-request", "message": str(exc)}), 400

        try:
            source = web_service.resolve_source(compile_request.source, compile_request.version)
            output = web_service.compile(
                source,
                compile_request.tags,
                minify=compile_request.minify,
                format=compile_request.format,
            )
        except LookupError as exc:
            return jsonify({"error": "not-found", "message": str(exc)}), 404
        except (FetchError, ManifestError) as exc:
            _LOG.error("Failed to load source: %s", exc)
            return jsonify({"error": "source-unavailable", "message": str(exc)}), 502
        except TransformError as exc:
            _LOG.error("Post-processing failed: %s", exc)
            return jsonify({"error": "transform-failed", "message": str(exc)}), 500

        response = Response(output, mimetype="application/javascript")
        response.headers["Content-Disposition"] = f'attachment; filename="{web_service.output_name}"'
        return response

    return bp
