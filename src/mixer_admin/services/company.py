"""
Company profile shown on quotations: details, logo and signature.

Images are validated locally (type and size) before upload; a rejected file
raises ClientValidationError and never reaches the network.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from mixer_admin.lib import logs
from mixer_admin.models.common import Record
from mixer_admin.services.base import ResourceApi, require
from mixer_admin.services.errors import ClientValidationError
from mixer_admin.validation import ValidationResult, validate_logo, validate_signature

LOG = logs.logger(__file__)


@dataclass
class UploadFile:
    """An in-memory file selected for upload."""

    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    def to_multipart(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)


def _check(result: ValidationResult) -> None:
    if not result.is_valid:
        raise ClientValidationError(result.errors[0], result.errors)


class CompanyApi(ResourceApi):
    base_path = "/admin/company"

    async def details(self) -> Record | None:
        return await self._get(
            self.base_path,
            error_message="Failed to fetch company details",
            notify_errors=False,
        )

    async def update_details(self, data: Mapping[str, Any]) -> Record | None:
        require(data, "Company data is required")
        body = await self._send(
            "PUT",
            self.base_path,
            json=dict(data),
            error_message="Failed to update company details",
            success_message="Company details updated successfully",
        )
        return body.get("data")

    async def image_status(self) -> dict:
        """Which of logo/signature are currently stored."""
        data = await self._get(
            self._path("images", "status"),
            error_message="Failed to fetch image status",
            notify_errors=False,
        )
        return dict(data or {})

    async def upload_images(
        self, logo: UploadFile | None = None, signature: UploadFile | None = None
    ) -> Record | None:
        """
        Upload a new logo and/or signature as one multipart request.

        Args:
            logo: JPEG, PNG or GIF up to 5 MB.
            signature: JPEG or PNG up to 2 MB.

        Raises:
            ClientValidationError: Neither file was given, or a file failed
                the type/size check.
        """
        if logo is None and signature is None:
            raise ClientValidationError("At least one image file is required")
        files = {}
        if logo is not None:
            _check(validate_logo(logo.content_type, logo.size))
            files["logo"] = logo.to_multipart()
        if signature is not None:
            _check(validate_signature(signature.content_type, signature.size))
            files["signature"] = signature.to_multipart()
        LOG.info("upload_images - fields:%s", sorted(files))
        body = await self._send(
            "POST",
            self._path("upload-images"),
            files=files,
            error_message="Failed to upload images",
            success_message="Images uploaded successfully",
        )
        for warning in body.get("warnings") or []:
            self.notifier.warning(str(warning))
        return body.get("data")

    async def upload_logo(self, logo: UploadFile) -> Record | None:
        return await self.upload_images(logo=logo)

    async def upload_signature(self, signature: UploadFile) -> Record | None:
        return await self.upload_images(signature=signature)
