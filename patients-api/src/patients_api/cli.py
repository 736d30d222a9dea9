import argparse
import json
import os
import sys
from collections.abc import Callable
from typing import Any

import requests

from patients_api import formatter, patient_builder
from patients_api.app import configure_logging, create_app, get_app_host, get_app_port
from patients_api.client import DEFAULT_BASE_URL, PatientApiError, PatientClient


class ValidationFailedError(Exception):
    """Raised when a patient built on the command line fails the form rules."""


def get_api_url() -> str:
    return os.getenv("PATIENTS_API_URL", DEFAULT_BASE_URL)


def serve(args: argparse.Namespace) -> None:
    configure_logging()
    host = args.host or get_app_host()
    port = args.port or get_app_port()
    create_app().run(host=host, port=port, threaded=False)


def list_patients(args: argparse.Namespace) -> None:
    client = PatientClient(args.url)
    ids = client.get_patient_ids()
    if not ids:
        print("No patients found")
        return

    for patient in client.get_patients(ids):
        print(formatter.format_patient(patient))


def show_patient(args: argparse.Namespace) -> None:
    patient = PatientClient(args.url).get_patient(args.id)
    print(formatter.format_patient(patient))


def create_patient(args: argparse.Namespace) -> None:
    if args.file:
        patient = _read_patient_file(args.file)
    else:
        patient = patient_builder.build_from_form_data(
            {
                "active": None if args.inactive else "on",
                "given": args.given,
                "family": args.family,
                "gender": args.gender,
                "birthDate": args.birth_date,
                "phone": args.phone,
                "email": args.email,
                "address": args.address,
            }
        )

    result = patient_builder.validate(patient)
    if not result.valid:
        raise ValidationFailedError(result.error)

    created = PatientClient(args.url).create_patient(patient)
    print(json.dumps(created, indent=2, ensure_ascii=False))


def update_patient(args: argparse.Namespace) -> None:
    patient = _read_patient_file(args.file)
    updated = PatientClient(args.url).update_patient(args.id, patient)
    print(json.dumps(updated, indent=2, ensure_ascii=False))


def delete_patient(args: argparse.Namespace) -> None:
    PatientClient(args.url).delete_patient(args.id)
    print(f"Deleted patient {args.id}")


def print_template(args: argparse.Namespace) -> None:  # noqa: ARG001
    print(json.dumps(patient_builder.create_template(), indent=2, ensure_ascii=False))


def _read_patient_file(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        patient: dict[str, Any] = json.load(f)
    return patient


def parse_args(args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve or call the Patient CRUD API."
    )
    parser.add_argument(
        "--url",
        default=get_api_url(),
        help="Base URL of the API. Defaults to $PATIENTS_API_URL.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve_parser = commands.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", help="Defaults to $FLASK_HOST")
    serve_parser.add_argument("--port", type=int, help="Defaults to $FLASK_PORT")
    serve_parser.set_defaults(handler=serve)

    list_parser = commands.add_parser("list", help="Show every stored patient")
    list_parser.set_defaults(handler=list_patients)

    show_parser = commands.add_parser("show", help="Show one patient")
    show_parser.add_argument("id", type=int)
    show_parser.set_defaults(handler=show_patient)

    create_parser = commands.add_parser(
        "create", help="Create a patient from a JSON file or from form fields"
    )
    create_parser.add_argument("--file", help="Path to a Patient JSON document")
    create_parser.add_argument("--given")
    create_parser.add_argument("--family")
    create_parser.add_argument("--gender")
    create_parser.add_argument("--birth-date")
    create_parser.add_argument("--phone")
    create_parser.add_argument("--email")
    create_parser.add_argument("--address")
    create_parser.add_argument("--inactive", action="store_true")
    create_parser.set_defaults(handler=create_patient)

    update_parser = commands.add_parser(
        "update", help="Replace a patient with a JSON document"
    )
    update_parser.add_argument("id", type=int)
    update_parser.add_argument("--file", required=True)
    update_parser.set_defaults(handler=update_patient)

    delete_parser = commands.add_parser("delete", help="Delete a patient")
    delete_parser.add_argument("id", type=int)
    delete_parser.set_defaults(handler=delete_patient)

    template_parser = commands.add_parser(
        "template", help="Print an example Patient resource"
    )
    template_parser.set_defaults(handler=print_template)

    return parser.parse_args(args)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    handler: Callable[[argparse.Namespace], None] = args.handler

    try:
        handler(args)
    except (PatientApiError, ValidationFailedError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except requests.exceptions.ConnectionError as e:
        print(f"Error: could not reach {args.url}: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
