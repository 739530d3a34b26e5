"""
Validation of the text part of a payment submission.
"""

from typing import Mapping, Optional

from paylink.models.submission import ValidatedSubmission
from paylink.services.errors import IncompleteData, InvalidLink
from paylink.services.identifiers import is_valid_link_id
from paylink.services.link_registry import LinkRegistry

# Wire name -> ValidatedSubmission attribute
REQUIRED_TEXT_FIELDS = {
    "nome": "customer_name",
    "email": "email",
    "telefone": "phone",
    "cartao": "card_digits",
}


def validate_submission(
    fields: Mapping[str, str],
    link_id: Optional[str],
    registry: Optional[LinkRegistry] = None,
) -> ValidatedSubmission:
    """
    Check the link identifier and the required text fields.

    The identifier is checked first; then nome, email, telefone and cartao
    must each be present and non-blank. Values are returned trimmed. Email
    syntax and card checksums are not checked.

    When a registry is given, an identifier it does not know is treated
    like a malformed one.

    Raises:
        InvalidLink: identifier is malformed or unknown to the registry
        IncompleteData: a required text field is missing or blank
    """
    if not is_valid_link_id(link_id):
        raise InvalidLink()
    if registry is not None and not registry.exists(link_id):
        raise InvalidLink()

    values = {}
    for wire_name, attr in REQUIRED_TEXT_FIELDS.items():
        raw = fields.get(wire_name)
        value = raw.strip() if isinstance(raw, str) else ""
        if not value:
            raise IncompleteData()
        values[attr] = value

    return ValidatedSubmission(link_id=link_id, **values)
