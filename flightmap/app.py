"""
FlightMap Flask Application.

Main entry point for the web application. Initializes:
- Shared flight view (map surface, details panel, message box)
- Refresh pipeline and its background scheduler
- API routes
- Page routes

Usage:
    python -m flightmap.app

Or with gunicorn:
    gunicorn 'flightmap.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask, Response, render_template, current_app
from flask_cors import CORS

from flightmap.config import config
from flightmap.api import flights_bp, status_bp
from flightmap.ingestion import AviationStackClient, RefreshPipeline
from flightmap.view import FlightView

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
# urllib3 logs every request URL at DEBUG, access key included
logging.getLogger('urllib3').setLevel(logging.INFO)

logger = logging.getLogger(__name__)


def create_app(
    start_scheduler: bool = True,
    client: Optional[AviationStackClient] = None,
    view: Optional[FlightView] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        start_scheduler: Whether to start the background refresh loop.
                         Set to False for testing.
        client: AviationStack client (created from config if None)
        view: Flight view to render into (a fresh one if None)

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(status_bp)

    view = view or FlightView()
    pipeline = RefreshPipeline(view=view, client=client)

    app.config['FLIGHT_VIEW'] = view
    app.config['REFRESH_PIPELINE'] = pipeline

    if start_scheduler:
        # First cycle runs immediately on the background thread
        pipeline.start_background()
        logger.info(f'Refresh scheduled every {pipeline.interval}s')

    # -------------------------------------------------------------------------
    # Page routes
    # -------------------------------------------------------------------------

    @app.route('/')
    def index():
        """Serve the map page with details panel and message box."""
        pipeline = current_app.config['REFRESH_PIPELINE']
        snapshot = current_app.config['FLIGHT_VIEW'].snapshot()
        return render_template(
            'index.html',
            refresh_seconds=int(pipeline.interval),
            cards=snapshot.cards,
            message=snapshot.message,
            updated_at=snapshot.updated_at,
        )

    @app.route('/map')
    def flight_map():
        """Serve the standalone folium map."""
        html = current_app.config['FLIGHT_VIEW'].render_map_html()
        return Response(html, mimetype='text/html')

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'status': 'ok'}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    port = config.port

    logger.info(f'Starting FlightMap on http://localhost:{port}')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
        use_reloader=False,  # Disable reloader to prevent duplicate refresh threads
    )


if __name__ == '__main__':
    run_development_server()
