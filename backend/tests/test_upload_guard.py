"""
Upload guard tests.

Covers media type, size and field arity rules for the two verification
images. Everything runs on in-memory bytes.
"""

import pytest

from paylink.models.submission import UploadedImage
from paylink.services.errors import (
    MissingOrDuplicateField,
    PayloadTooLarge,
    UnexpectedFileField,
    UnsupportedMediaType,
    UploadError,
)
from paylink.services.upload_guard import (
    CARD_PHOTO_FIELD,
    MAX_IMAGE_BYTES,
    SELFIE_FIELD,
    check_image,
    validate_uploads,
)

MIB = 1024 * 1024


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _image(content_type="image/jpeg", size=1024, filename="photo.jpg"):
    return UploadedImage(filename=filename, content_type=content_type, content=b"\xff" * size)


def _files(card=None, selfie=None):
    return {
        CARD_PHOTO_FIELD: [_image(filename="card.jpg")] if card is None else card,
        SELFIE_FIELD: [_image(filename="selfie.jpg")] if selfie is None else selfie,
    }


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestValidUploads:

    def test_one_image_per_field_is_accepted(self):
        card = _image(filename="card.jpg")
        selfie = _image(content_type="image/png", filename="selfie.png")

        result = validate_uploads({CARD_PHOTO_FIELD: [card], SELFIE_FIELD: [selfie]})

        assert result.card_photo is card
        assert result.selfie_with_document is selfie

    def test_exactly_five_mib_is_accepted(self):
        result = validate_uploads(_files(card=[_image(size=MAX_IMAGE_BYTES)]))
        assert result.card_photo.size == 5 * MIB

    def test_media_type_check_is_case_insensitive(self):
        validate_uploads(_files(selfie=[_image(content_type="IMAGE/HEIC")]))

    def test_empty_unknown_field_is_ignored(self):
        files = _files()
        files["extra"] = []
        validate_uploads(files)


class TestMediaType:

    def test_pdf_is_rejected(self):
        with pytest.raises(UnsupportedMediaType) as exc_info:
            validate_uploads(_files(card=[_image(content_type="application/pdf")]))
        assert exc_info.value.error_code == "unsupported_media_type"
        assert exc_info.value.message == "Apenas imagens são permitidas!"

    @pytest.mark.parametrize("content_type", ["", "text/plain", "imagejpeg", "video/mp4"])
    def test_non_image_types_are_rejected(self, content_type):
        with pytest.raises(UnsupportedMediaType):
            check_image(_image(content_type=content_type))


class TestSize:

    def test_six_mib_is_rejected(self):
        with pytest.raises(PayloadTooLarge) as exc_info:
            validate_uploads(_files(selfie=[_image(size=6 * MIB)]))
        assert exc_info.value.error_code == "payload_too_large"

    def test_one_byte_over_limit_is_rejected(self):
        with pytest.raises(PayloadTooLarge):
            check_image(_image(size=MAX_IMAGE_BYTES + 1))


class TestFieldArity:

    def test_zero_card_photos_is_rejected(self):
        with pytest.raises(MissingOrDuplicateField) as exc_info:
            validate_uploads(_files(card=[]))
        assert CARD_PHOTO_FIELD in exc_info.value.message

    def test_missing_card_photo_key_is_rejected(self):
        files = _files()
        del files[CARD_PHOTO_FIELD]
        with pytest.raises(MissingOrDuplicateField):
            validate_uploads(files)

    def test_two_selfies_are_rejected(self):
        with pytest.raises(MissingOrDuplicateField) as exc_info:
            validate_uploads(_files(selfie=[_image(), _image()]))
        assert SELFIE_FIELD in exc_info.value.message

    def test_no_files_at_all_is_rejected(self):
        with pytest.raises(MissingOrDuplicateField):
            validate_uploads({})

    def test_file_under_unexpected_field_is_rejected(self):
        files = _files()
        files["documento"] = [_image()]
        with pytest.raises(UnexpectedFileField):
            validate_uploads(files)


class TestErrorHierarchy:

    def test_all_upload_errors_share_base_class(self):
        for exc_type in (UnsupportedMediaType, PayloadTooLarge):
            assert issubclass(exc_type, UploadError)
        assert issubclass(MissingOrDuplicateField, UploadError)
        assert issubclass(UnexpectedFileField, UploadError)

    def test_bad_type_reported_before_arity(self):
        """A PDF among duplicate files reports the media type problem."""
        with pytest.raises(UnsupportedMediaType):
            validate_uploads(_files(selfie=[_image(), _image(content_type="application/pdf")]))
