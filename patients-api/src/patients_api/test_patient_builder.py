from typing import Any

import pytest

from patients_api import patient_builder
from patients_api.validation import validate_patient


class TestBuildFromFormData:
    def test_minimal_form(self) -> None:
        patient = patient_builder.build_from_form_data(
            {"given": "Ana", "family": "Souza", "gender": "female"}
        )

        assert patient == {
            "resourceType": "Patient",
            "active": False,
            "name": [{"given": ["Ana"], "family": "Souza"}],
            "gender": "female",
        }

    def test_full_form(self) -> None:
        patient = patient_builder.build_from_form_data(
            {
                "active": "on",
                "given": "Ana",
                "family": "Souza",
                "gender": "female",
                "birthDate": "1992-03-14",
                "phone": "(51) 98888-7777",
                "email": "ana@example.com",
                "address": "Rua da Praia, 10",
            },
            patient_id=4,
        )

        assert patient == {
            "resourceType": "Patient",
            "active": True,
            "name": [{"given": ["Ana"], "family": "Souza"}],
            "gender": "female",
            "identifier": [{"value": "4"}],
            "birthDate": "1992-03-14",
            "telecom": [
                {"system": "phone", "value": "(51) 98888-7777"},
                {"system": "email", "value": "ana@example.com"},
            ],
            "address": [{"line": ["Rua da Praia, 10"]}],
        }

    def test_empty_contact_fields_omit_telecom(self) -> None:
        patient = patient_builder.build_from_form_data(
            {"given": "Ana", "family": "Souza", "gender": "female", "phone": ""}
        )
        assert "telecom" not in patient

    def test_only_email_is_kept(self) -> None:
        patient = patient_builder.build_from_form_data(
            {"given": "Ana", "family": "Souza", "email": "ana@example.com"}
        )
        assert patient["telecom"] == [{"system": "email", "value": "ana@example.com"}]

    def test_built_patient_passes_server_validation(self) -> None:
        patient = patient_builder.build_from_form_data(
            {"given": "Ana", "family": "Souza", "gender": "other"}, patient_id=1
        )
        assert validate_patient(patient).valid


class TestCreateTemplate:
    def test_template_is_a_complete_valid_patient(self) -> None:
        template = patient_builder.create_template()

        assert patient_builder.validate(template).valid
        assert set(template) == {
            "resourceType",
            "active",
            "name",
            "telecom",
            "gender",
            "birthDate",
            "address",
        }

    def test_template_is_a_fresh_copy(self) -> None:
        template = patient_builder.create_template()
        template["name"][0]["family"] = "Changed"

        assert patient_builder.create_template()["name"][0]["family"] == "Silva"


class TestValidate:
    def test_valid_patient(self) -> None:
        result = patient_builder.validate(
            {
                "resourceType": "Patient",
                "name": [{"given": ["Ana"], "family": "Souza"}],
                "gender": "female",
            }
        )
        assert result.valid
        assert result.error is None

    def test_server_checks_run_first(self) -> None:
        result = patient_builder.validate({"resourceType": "Person"})
        assert result.error == 'Resource type must be "Patient"'

    @pytest.mark.parametrize(
        ("patient", "error"),
        [
            (
                {"resourceType": "Patient", "gender": "male"},
                "Patient must have at least one name",
            ),
            (
                {"resourceType": "Patient", "name": [], "gender": "male"},
                "Patient must have at least one name",
            ),
            (
                {"resourceType": "Patient", "name": [{"family": "Souza"}]},
                "Patient name must include given name(s)",
            ),
            (
                {
                    "resourceType": "Patient",
                    "name": [{"given": [""], "family": "Souza"}],
                },
                "Patient name must include given name(s)",
            ),
            (
                {"resourceType": "Patient", "name": [{"given": ["Ana"]}]},
                "Patient name must include family name",
            ),
            (
                {
                    "resourceType": "Patient",
                    "name": [{"given": ["Ana"], "family": "Souza"}],
                },
                "Patient must have gender specified",
            ),
            (
                {
                    "resourceType": "Patient",
                    "name": [{"given": ["Ana"], "family": "Souza"}],
                    "gender": "robot",
                },
                "Gender must be one of: male, female, other, unknown",
            ),
        ],
    )
    def test_form_rules(self, patient: dict[str, Any], error: str) -> None:
        result = patient_builder.validate(patient)

        assert result.valid is False
        assert result.error == error
