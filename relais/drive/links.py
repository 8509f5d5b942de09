"""Browser links for Drive files and folders."""

from relais.errors import InvalidInputError


def file_link(file_id: str) -> str:
    """Viewer link for a Drive file."""
    if not file_id:
        raise InvalidInputError("File ID is empty")
    return f"https://drive.google.com/file/d/{file_id}/view"


def folder_link(folder_id: str) -> str:
    """Browser link for a Drive folder."""
    if not folder_id:
        raise InvalidInputError("Folder ID is empty")
    return f"https://drive.google.com/drive/folders/{folder_id}"
