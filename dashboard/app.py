"""
Flask dashboard for the synthetic fraud scoring demo.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional

from flask import Flask, render_template, jsonify
from flask_cors import CORS

from fraudview.ml.model_trainer import ScoredDataset, ScoringPipeline

from .api.charts_api import charts_bp
from .api.transactions_api import transactions_bp


class FraudDetectionDashboard:
    """Main dashboard application."""

    def __init__(self, config: Dict[str, Any], dataset: Optional[ScoredDataset] = None):
        """Initialize the dashboard, scoring the synthetic set if none is given."""
        self.config = config
        self.dashboard_config = config.get("dashboard", {})
        self.logger = logging.getLogger(__name__)
        self.started_at = datetime.utcnow()

        # Generation and scoring happen once, before the first request
        if dataset is None:
            dataset = ScoringPipeline(config).run()
        self.dataset = dataset

        self.app = Flask(__name__)
        if self.dashboard_config.get("cors", True):
            CORS(self.app)

        self.app.config["SCORED_DATASET"] = self.dataset
        self.app.config["TRANSACTIONS_LIMIT"] = self.dashboard_config.get(
            "transactions_limit", 100
        )

        self.app.register_blueprint(charts_bp)
        self.app.register_blueprint(transactions_bp)

        # Register routes
        self._register_routes()

    def _register_routes(self):
        """Register Flask routes."""

        @self.app.route("/")
        def index():
            """Main dashboard page."""
            return render_template(
                "fraud_dashboard.html",
                regions=self.dataset.categories,
                selected=self.dataset.categories[0],
                transaction_count=self.dataset.size,
            )

        @self.app.route("/api/model")
        def get_model():
            """Model description and in-sample training metrics."""
            return jsonify(
                {
                    "model_info": self.dataset.model_info,
                    "training_results": self.dataset.training_results,
                }
            )

        @self.app.route("/api/health")
        def health_check():
            """Health check endpoint."""
            try:
                return jsonify(self._get_health_status())
            except Exception as e:
                self.logger.error(f"Error in health check: {e}")
                return jsonify({"status": "unhealthy", "error": str(e)}), 500

    def _get_health_status(self) -> Dict[str, Any]:
        """Get dashboard health status."""
        scored = bool(self.dataset.frame["fraud_probability"].notna().all())
        return {
            "status": "healthy" if scored else "unhealthy",
            "components": {
                "dataset": "healthy" if self.dataset.size > 0 else "unhealthy",
                "model": "healthy" if scored else "unhealthy",
            },
            "transactions": self.dataset.size,
            "uptime": str(datetime.utcnow() - self.started_at).split(".")[0],
            "timestamp": datetime.utcnow().isoformat(),
        }

    def run(self, host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
        """Run the Flask application."""
        host = host or self.dashboard_config.get("host", "127.0.0.1")
        port = port or self.dashboard_config.get("port", 8050)
        self.logger.info(f"Starting dashboard on {host}:{port}")
        # Single process, one request at a time
        self.app.run(
            host=host, port=port, debug=debug, use_reloader=False, threaded=False
        )


def create_dashboard_app(
    config: Dict[str, Any], dataset: Optional[ScoredDataset] = None
) -> Flask:
    """Create and configure the dashboard Flask app."""
    dashboard = FraudDetectionDashboard(config, dataset)
    return dashboard.app
