import argparse
from pathlib import Path

# Import configuration management
import sys
sys.path.append(str(Path(__file__).parent.parent))
from config_manager import ConfigManager

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from builder_service import BuilderService, build_session, make_fetcher

app = Flask(__name__)
app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_proto = 1,     # trust 1 hop for X-Forwarded-Proto
        x_host  = 1,     # trust 1 hop for X-Forwarded-Host
        x_prefix= 1)     # <-- pay attention to X-Forwarded-Prefix

# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

config_manager = ConfigManager()
builder_config = config_manager.get_builder_config()
app_config = config_manager.get_app_config()
postprocess_config = config_manager.get_postprocess_config()

# -----------------------------------------------------------------------------
# Builder module
# -----------------------------------------------------------------------------

from app.builder.factory import create_builder_module

builder = BuilderService(
    fetch=make_fetcher(
        build_session(builder_config.proxy_url),
        timeout=builder_config.fetch_timeout,
        allow_local=builder_config.allow_local_sources,
    ),
    max_workers=builder_config.max_workers,
    max_cached_scripts=builder_config.max_cached_scripts,
)

builder_module = create_builder_module(
    builder=builder,
    manifest_url=builder_config.manifest_url,
    output_name=builder_config.output_name,
    postprocess_defaults=postprocess_config,
)

app.register_blueprint(builder_module["blueprint"])


@app.route("/health")
def health():
    """Liveness probe."""
    return jsonify({"status": "ok"})

# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Flask application for the Umbra Builder")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    # Override configuration with command line arguments
    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    from builder_service import setup_logging
    setup_logging(app_config.debug)

    print(f"📋 Configuration loaded:")
    print(f"   - Manifest: {builder_config.manifest_url}")
    print(f"   - Max Workers: {builder_config.max_workers}")
    print(f"   - Server: {app_config.host}:{app_config.port}")
    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
