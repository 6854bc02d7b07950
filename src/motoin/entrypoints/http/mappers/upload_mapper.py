from fastapi import UploadFile

from motoin.domain.uploads import Upload


def to_upload(file: UploadFile) -> Upload:
    """Read a multipart file part fully into memory."""
    return Upload(filename=file.filename, content_type=file.content_type, content=file.file.read())


def to_uploads(files: list[UploadFile]) -> list[Upload]:
    return [to_upload(file) for file in files]
