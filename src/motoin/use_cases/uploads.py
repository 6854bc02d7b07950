"""Storing and serving files uploaded by users.

Avatars are stored as avatar-<user id><ext>, so a new upload with the same
extension overwrites the previous one. Ticket attachments get a random
name per file and are never overwritten.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from uuid import uuid4

from motoin.domain.errors import NotFoundError
from motoin.domain.uploads import (
    AVATAR_POLICY,
    TICKET_ATTACHMENT_POLICY,
    StoredFile,
    Upload,
    content_type_of,
)
from motoin.domain.users import User
from motoin.ports.file_storage import FileStorage
from motoin.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)

AVATAR_FOLDER = "avatars"
TICKET_FOLDER = "tickets"
AVATAR_URL_PREFIX = "/v1/auth/avatars/"
TICKET_FILE_URL_PREFIX = "/v1/tickets/files/"


def _stored_name(url: str | None, prefix: str) -> str | None:
    if url and url.startswith(prefix):
        return url[len(prefix):]
    return None


@dataclass(frozen=True, slots=True)
class UploadAvatarRequest:
    user: User
    upload: Upload


class UploadAvatar:
    def __init__(self, user_repository: UserRepository, file_storage: FileStorage) -> None:
        self._users = user_repository
        self._storage = file_storage

    def execute(self, request: UploadAvatarRequest) -> User:
        """
        Raises:
            UploadValidationError: If the image type or size is not accepted
        """
        AVATAR_POLICY.validate([request.upload])
        user = request.user
        name = f"avatar-{user.id}{AVATAR_POLICY.extension_for(request.upload)}"

        previous = _stored_name(user.avatar, AVATAR_URL_PREFIX)
        if previous and previous != name:
            self._storage.delete(AVATAR_FOLDER, previous)

        self._storage.save(AVATAR_FOLDER, name, request.upload.content)
        logger.info("Avatar uploaded", extra={"user_id": user.id, "file_name": name})
        return self._users.save(replace(user, avatar=f"{AVATAR_URL_PREFIX}{name}"))


class RemoveAvatar:
    def __init__(self, user_repository: UserRepository, file_storage: FileStorage) -> None:
        self._users = user_repository
        self._storage = file_storage

    def execute(self, user: User) -> User:
        name = _stored_name(user.avatar, AVATAR_URL_PREFIX)
        if name:
            self._storage.delete(AVATAR_FOLDER, name)
        if user.avatar is None:
            return user
        return self._users.save(replace(user, avatar=None))


class ReadUploadedFile:
    """Return a stored file from one folder, with a content type guessed from its name."""

    def __init__(self, file_storage: FileStorage, folder: str) -> None:
        self._storage = file_storage
        self._folder = folder

    def execute(self, name: str) -> StoredFile:
        content = self._storage.read(self._folder, name)
        if content is None:
            raise NotFoundError("File", name)
        return StoredFile(name=name, content_type=content_type_of(name), content=content)


class TicketAttachmentStore:
    """Validates and stores the files attached to one ticket message."""

    def __init__(self, file_storage: FileStorage) -> None:
        self._storage = file_storage

    def validate(self, uploads: list[Upload]) -> None:
        TICKET_ATTACHMENT_POLICY.validate(uploads)

    def store(self, uploads: list[Upload]) -> list[str]:
        """Store already validated uploads and return their URLs in upload order."""
        urls = []
        for upload in uploads:
            name = f"ticket-{uuid4().hex}{TICKET_ATTACHMENT_POLICY.extension_for(upload)}"
            self._storage.save(TICKET_FOLDER, name, upload.content)
            urls.append(f"{TICKET_FILE_URL_PREFIX}{name}")
        return urls
