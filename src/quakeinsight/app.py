import logging
from typing import Optional
import duckdb
from flask import Flask, Response, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from quakeinsight.configs.settings import Settings
from quakeinsight.errors import BadRequest, QuakeInsightError
from quakeinsight.export import to_csv, to_json
from quakeinsight.fetch_earthquakes import FetchParams, fetch_earthquakes
from quakeinsight.seed import seed_earthquakes
from quakeinsight.seismic import PREDICTIONS, ground_motion, regional_pga
from quakeinsight.sms import SmsAlertRequest, get_provider, send_sms_alert
from quakeinsight.stats import compute_stats, magnitude_distribution
from quakeinsight.utils.duckdb import initialize, query_earthquakes


class ArchiveParams(BaseModel):
    """Filters for reads of the stored earthquakes table."""

    model_config = ConfigDict(populate_by_name=True)

    start_year: Optional[int] = Field(default=None, alias="startYear")
    end_year: Optional[int] = Field(default=None, alias="endYear")
    min_magnitude: Optional[float] = Field(default=None, alias="minMagnitude")
    state: Optional[str] = None
    region: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=0)


class GroundMotionParams(BaseModel):
    magnitude: float = Field(ge=0, le=10)
    depth: float = Field(default=10.0, ge=0)
    distance: float = Field(default=50.0, gt=0)


def query_args() -> dict:
    # empty query values count as missing
    return {key: value for key, value in request.args.items() if value != ""}


def validation_message(e: ValidationError) -> str:
    errors = []
    for error in e.errors():
        location = ".".join(str(part) for part in error["loc"])
        errors.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "Invalid request: " + "; ".join(errors)


def get_settings() -> Settings:
    return current_app.extensions["quakeinsight.settings"]


def get_conn() -> duckdb.DuckDBPyConnection:
    conn = current_app.extensions.get("quakeinsight.conn")
    if conn is None:
        conn = initialize(get_settings().database_path)
        current_app.extensions["quakeinsight.conn"] = conn
    # duckdb connections aren't shared across threads, hand out a cursor
    return conn.cursor()


def read_archive(params: ArchiveParams):
    return query_earthquakes(
        get_conn(),
        start_year=params.start_year,
        end_year=params.end_year,
        min_magnitude=params.min_magnitude,
        state=params.state,
        region=params.region,
        limit=params.limit,
    )


def create_app(
    settings: Settings = None, conn: duckdb.DuckDBPyConnection = None
) -> Flask:
    """Application factory.

    Args:
        settings (Settings): configuration, read from the environment when omitted
        conn (duckdb.DuckDBPyConnection): database connection, opened lazily
            from settings.database_path when omitted

    Returns:
        app (Flask): the configured application
    """
    app = Flask(__name__)
    CORS(app)

    if settings is None:
        settings = Settings.from_env()
    app.extensions["quakeinsight.settings"] = settings
    app.extensions["quakeinsight.conn"] = conn
    app.logger.setLevel(settings.log_level.upper())

    @app.errorhandler(QuakeInsightError)
    def handle_quakeinsight_error(e: QuakeInsightError):
        logging.error(f"{request.path}: {e.message}")
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"error": validation_message(e)}), 400

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        logging.exception(f"Error in {request.path}")
        return jsonify({"error": str(e) or "An unexpected error occurred"}), 500

    @app.get("/fetch-earthquakes")
    def fetch_earthquakes_route():
        params = FetchParams.model_validate(query_args())
        return jsonify(fetch_earthquakes(params, get_settings().usgs_timeout))

    @app.post("/send-sms-alert")
    def send_sms_alert_route():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise BadRequest("Request body must be a JSON object")
        alert_request = SmsAlertRequest.model_validate(body)
        return jsonify(send_sms_alert(alert_request, get_settings()))

    @app.post("/seed-earthquakes")
    def seed_earthquakes_route():
        summary = seed_earthquakes(get_conn(), timeout=get_settings().usgs_timeout)
        return jsonify(summary)

    @app.get("/earthquakes")
    def earthquakes_route():
        earthquakes = read_archive(ArchiveParams.model_validate(query_args()))
        return jsonify(
            {
                "earthquakes": [eq.to_api() for eq in earthquakes],
                "count": len(earthquakes),
                "stats": compute_stats(earthquakes),
                "magnitudeDistribution": magnitude_distribution(earthquakes),
                "regionalPga": regional_pga(earthquakes),
            }
        )

    @app.get("/earthquakes/export")
    def export_route():
        args = query_args()
        export_format = args.pop("format", "csv").lower()
        if export_format not in ("csv", "json"):
            raise BadRequest(f"Unsupported export format: {export_format}")

        params = ArchiveParams.model_validate(args)
        earthquakes = read_archive(params)

        if export_format == "csv":
            content, mimetype = to_csv(earthquakes), "text/csv"
        else:
            content, mimetype = to_json(earthquakes, params.model_dump()), "application/json"

        return Response(
            content,
            mimetype=mimetype,
            headers={
                "Content-Disposition": f"attachment; filename=india_earthquakes.{export_format}"
            },
        )

    @app.get("/ground-motion")
    def ground_motion_route():
        params = GroundMotionParams.model_validate(query_args())
        return jsonify(ground_motion(params.magnitude, params.depth, params.distance))

    @app.get("/predictions")
    def predictions_route():
        return jsonify({"predictions": PREDICTIONS})

    @app.get("/config")
    def config_route():
        settings = get_settings()
        try:
            provider = get_provider(settings).name
        except QuakeInsightError:
            provider = None
        return jsonify({"mapboxToken": settings.mapbox_token, "smsProvider": provider})

    return app
