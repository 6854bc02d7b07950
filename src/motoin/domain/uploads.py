"""Rules for files uploaded by users: avatars and ticket attachments."""

from __future__ import annotations

from dataclasses import dataclass

from motoin.domain.errors import ValidationError

IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

VIDEO_TYPES = {
    "video/mp4": ".mp4",
    "video/webm": ".webm",
    "video/quicktime": ".mov",
}

MEGABYTE = 1024 * 1024


class UploadValidationError(ValidationError):
    """Raised when an uploaded file is rejected."""

    pass


@dataclass(frozen=True, slots=True)
class Upload:
    """A file received from a client, fully read into memory."""

    filename: str | None
    content_type: str | None
    content: bytes


@dataclass(frozen=True, slots=True)
class StoredFile:
    name: str
    content_type: str
    content: bytes


@dataclass(frozen=True, slots=True)
class UploadPolicy:
    """
    Accepted content types (each mapped to the extension files are stored
    under), per-file size limit and maximum number of files per request.
    """

    field: str
    allowed_types: dict[str, str]
    max_bytes: int
    max_files: int = 1

    def extension_for(self, upload: Upload) -> str:
        return self.allowed_types[upload.content_type or ""]

    def validate(self, uploads: list[Upload]) -> None:
        """
        Raises:
            UploadValidationError: If there are too many files, or a file is
                empty, too large or of a type the policy does not accept
        """
        if len(uploads) > self.max_files:
            raise UploadValidationError(
                errors=[
                    {
                        "field": self.field,
                        "message": f"At most {self.max_files} files are allowed",
                        "code": "TOO_MANY_FILES",
                    }
                ]
            )

        errors = []
        for upload in uploads:
            name = upload.filename or self.field
            if upload.content_type not in self.allowed_types:
                errors.append(
                    {
                        "field": self.field,
                        "message": f"{name}: unsupported file type {upload.content_type!r}",
                        "code": "UNSUPPORTED_TYPE",
                    }
                )
            elif not upload.content:
                errors.append({"field": self.field, "message": f"{name}: file is empty", "code": "EMPTY_FILE"})
            elif len(upload.content) > self.max_bytes:
                errors.append(
                    {
                        "field": self.field,
                        "message": f"{name}: larger than {self.max_bytes // MEGABYTE} MB",
                        "code": "FILE_TOO_LARGE",
                    }
                )
        if errors:
            raise UploadValidationError(errors=errors)


AVATAR_POLICY = UploadPolicy(field="avatar", allowed_types=IMAGE_TYPES, max_bytes=2 * MEGABYTE)

TICKET_ATTACHMENT_POLICY = UploadPolicy(
    field="attachments",
    allowed_types={**IMAGE_TYPES, **VIDEO_TYPES},
    max_bytes=5 * MEGABYTE,
    max_files=5,
)

CONTENT_TYPES_BY_EXTENSION = {
    extension: content_type for content_type, extension in {**IMAGE_TYPES, **VIDEO_TYPES}.items()
}


def content_type_of(name: str) -> str:
    for extension, content_type in CONTENT_TYPES_BY_EXTENSION.items():
        if name.endswith(extension):
            return content_type
    return "application/octet-stream"
