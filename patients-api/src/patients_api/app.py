import logging
import os
from typing import Any

from flask import Blueprint, Flask, Response, current_app, request
from werkzeug.exceptions import (
    BadRequest,
    HTTPException,
    InternalServerError,
    MethodNotAllowed,
)

from patients_api.common.common import FlaskResponse
from patients_api.controller import (
    INVALID_FORMAT_MESSAGE,
    PatientController,
    error_response,
)
from patients_api.store import PatientStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"
NOT_FOUND_MESSAGE = "The requested endpoint was not found"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
EXTENSION_KEY = "patients_api"

patients = Blueprint("patients", __name__)


def get_app_host() -> str:
    host = os.getenv("FLASK_HOST")
    if host is None:
        raise RuntimeError("FLASK_HOST environment variable is not set.")
    return host


def get_app_port() -> int:
    port = os.getenv("FLASK_PORT")
    if port is None:
        raise RuntimeError("FLASK_PORT environment variable is not set.")
    return int(port)


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)


def create_app(store: PatientStore | None = None) -> Flask:
    """
    Create the Flask application serving the Patient API and the front-end.

    :param store: Store to serve records from. A fresh, empty store is created
        when none is given.
    :returns: The configured application.
    """
    app = Flask(__name__, static_url_path="")
    app.extensions[EXTENSION_KEY] = PatientController(
        store if store is not None else PatientStore()
    )

    app.register_blueprint(patients)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(InternalServerError, handle_internal_server_error)
    app.after_request(add_cors_headers)

    return app


def get_controller() -> PatientController:
    controller: PatientController = current_app.extensions[EXTENSION_KEY]
    return controller


def to_flask_response(result: FlaskResponse) -> Response:
    """Convert a controller :class:`FlaskResponse` into a Flask response."""
    response = Response(
        response=result.data, status=result.status_code, headers=result.headers
    )
    if result.data is None:
        response.headers.remove("Content-Type")
    return response


def _request_body() -> Any:
    # An empty body reaches validation as an absent resource.
    if not request.get_data(cache=True):
        return None
    return request.get_json(force=True)


@patients.get("/")
def index() -> Response:
    """Serve the front-end entry point."""
    return current_app.send_static_file("index.html")


@patients.post("/Patient")
def create_patient() -> Response:
    return to_flask_response(get_controller().create(_request_body()))


@patients.get("/Patient/<patient_id>")
def read_patient(patient_id: str) -> Response:
    return to_flask_response(get_controller().read(patient_id))


@patients.put("/Patient/<patient_id>")
def update_patient(patient_id: str) -> Response:
    return to_flask_response(get_controller().update(patient_id, _request_body()))


@patients.delete("/Patient/<patient_id>")
def delete_patient(patient_id: str) -> Response:
    return to_flask_response(get_controller().delete(patient_id))


@patients.get("/PatientIDs")
def list_patient_ids() -> Response:
    return to_flask_response(get_controller().list_ids())


@patients.errorhandler(BadRequest)
def handle_malformed_body(err: BadRequest) -> Response:
    """Request bodies that are not valid JSON are unprocessable, not bad requests."""
    logger.warning("Rejected malformed request body: %s", err.description)
    return to_flask_response(error_response(422, INVALID_FORMAT_MESSAGE))


def handle_http_exception(err: HTTPException) -> Response:
    status_code = err.code or 500
    message = NOT_FOUND_MESSAGE if status_code == 404 else str(err.description)

    response = to_flask_response(error_response(status_code, message))
    if isinstance(err, MethodNotAllowed) and err.valid_methods:
        response.headers["Allow"] = ", ".join(err.valid_methods)
    return response


def handle_internal_server_error(err: InternalServerError) -> Response:
    logger.error("Server error", exc_info=err.original_exception or err)
    return to_flask_response(error_response(500, UNEXPECTED_ERROR_MESSAGE))


def add_cors_headers(response: Response) -> Response:
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    if request.method == "OPTIONS":
        response.headers["Access-Control-Allow-Methods"] = "GET, PUT, POST, DELETE"
        response.headers["Access-Control-Allow-Headers"] = request.headers.get(
            "Access-Control-Request-Headers", "Content-Type"
        )
    return response


app = create_app()


if __name__ == "__main__":
    configure_logging()
    app.run(host=get_app_host(), port=get_app_port(), threaded=False)
