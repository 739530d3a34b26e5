"""
Validation of the verification images attached to a payment submission.

Works on bytes the HTTP layer has already buffered; nothing is written to
disk. The HTTP layer is still responsible for capping the total request
size before buffering.
"""

import logging
from typing import Mapping, Sequence

from paylink.models.submission import UploadedImage, ValidatedFiles
from paylink.services.errors import (
    MissingOrDuplicateField,
    PayloadTooLarge,
    UnexpectedFileField,
    UnsupportedMediaType,
)

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5 MiB

CARD_PHOTO_FIELD = "fotoCartao"
SELFIE_FIELD = "selfieDocumento"
REQUIRED_FILE_FIELDS = (CARD_PHOTO_FIELD, SELFIE_FIELD)


def check_image(image: UploadedImage) -> None:
    """Raise UnsupportedMediaType / PayloadTooLarge for a single file."""
    content_type = (image.content_type or "").lower().strip()
    if not content_type.startswith("image/"):
        raise UnsupportedMediaType()
    if image.size > MAX_IMAGE_BYTES:
        raise PayloadTooLarge()


def validate_uploads(files: Mapping[str, Sequence[UploadedImage]]) -> ValidatedFiles:
    """
    Check the uploaded files and return the two required images.

    Rules:
      - only the fotoCartao and selfieDocumento fields may carry files
      - every file must declare an image/* media type and be <= 5 MiB
      - each required field must carry exactly one file

    Raises an UploadError subclass on the first rule broken.
    """
    for field_name, images in files.items():
        if field_name not in REQUIRED_FILE_FIELDS and images:
            raise UnexpectedFileField(f"Campo de arquivo inesperado: {field_name}")
        for image in images:
            check_image(image)

    selected = {}
    for field_name in REQUIRED_FILE_FIELDS:
        images = list(files.get(field_name) or [])
        if len(images) != 1:
            logger.warning(
                f"Upload rejected: {len(images)} file(s) under {field_name!r}, expected 1"
            )
            raise MissingOrDuplicateField(
                f"Envie exatamente uma imagem no campo {field_name}."
            )
        selected[field_name] = images[0]

    return ValidatedFiles(
        card_photo=selected[CARD_PHOTO_FIELD],
        selfie_with_document=selected[SELFIE_FIELD],
    )
