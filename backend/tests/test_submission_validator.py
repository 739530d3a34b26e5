"""
Submission validator tests: link identifier format and required text fields.
"""

import pytest

from paylink.services.errors import IncompleteData, InvalidLink, ValidationError
from paylink.services.identifiers import generate_link_id
from paylink.services.link_registry import InMemoryLinkRegistry, NullLinkRegistry
from paylink.services.submission_validator import validate_submission

LINK_ID = "0b6c7a9e-3f8d-4c1e-9a2b-5d4e6f708192"


def _fields(**overrides):
    fields = {
        "nome": "Maria Silva",
        "email": "maria@example.com",
        "telefone": "+55 11 99999-0000",
        "cartao": "4111 1111 1111 1111",
    }
    fields.update(overrides)
    return {k: v for k, v in fields.items() if v is not None}


class TestValidSubmission:

    def test_all_fields_present_is_accepted(self):
        result = validate_submission(_fields(), LINK_ID)

        assert result.customer_name == "Maria Silva"
        assert result.email == "maria@example.com"
        assert result.phone == "+55 11 99999-0000"
        assert result.card_digits == "4111 1111 1111 1111"
        assert result.link_id == LINK_ID

    def test_field_order_does_not_matter(self):
        fields = _fields()
        reversed_fields = dict(reversed(list(fields.items())))

        assert validate_submission(reversed_fields, LINK_ID) == validate_submission(fields, LINK_ID)

    def test_values_are_trimmed(self):
        result = validate_submission(_fields(nome="  Maria  ", email=" m@x.com\n"), LINK_ID)
        assert result.customer_name == "Maria"
        assert result.email == "m@x.com"

    def test_email_and_card_are_not_format_checked(self):
        result = validate_submission(_fields(email="not an email", cartao="abc"), LINK_ID)
        assert result.email == "not an email"
        assert result.card_digits == "abc"

    def test_extra_fields_are_ignored(self):
        validate_submission(_fields(observacao="hello"), LINK_ID)


class TestIncompleteData:

    @pytest.mark.parametrize("missing", ["nome", "email", "telefone", "cartao"])
    def test_missing_field_is_rejected(self, missing):
        fields = _fields()
        del fields[missing]

        with pytest.raises(IncompleteData) as exc_info:
            validate_submission(fields, LINK_ID)
        assert exc_info.value.message == "Dados incompletos!"

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
    def test_blank_field_is_rejected(self, blank):
        with pytest.raises(IncompleteData):
            validate_submission(_fields(telefone=blank), LINK_ID)


class TestInvalidLink:

    def test_malformed_link_is_rejected(self):
        with pytest.raises(InvalidLink) as exc_info:
            validate_submission(_fields(), "not-a-uuid")
        assert exc_info.value.message == "Link inválido!"
        assert exc_info.value.error_code == "invalid_link"

    def test_missing_link_is_rejected(self):
        with pytest.raises(InvalidLink):
            validate_submission(_fields(), None)

    def test_link_checked_before_fields(self):
        with pytest.raises(InvalidLink):
            validate_submission({}, "not-a-uuid")

    def test_both_errors_are_validation_errors(self):
        assert issubclass(InvalidLink, ValidationError)
        assert issubclass(IncompleteData, ValidationError)


class TestRegistryCheck:

    def test_null_registry_accepts_any_well_formed_link(self):
        validate_submission(_fields(), LINK_ID, registry=NullLinkRegistry())

    def test_unknown_link_is_rejected_by_memory_registry(self):
        with pytest.raises(InvalidLink):
            validate_submission(_fields(), LINK_ID, registry=InMemoryLinkRegistry())

    def test_issued_link_is_accepted_by_memory_registry(self):
        registry = InMemoryLinkRegistry()
        link_id = generate_link_id()
        registry.record(link_id)

        result = validate_submission(_fields(), link_id, registry=registry)
        assert result.link_id == link_id
