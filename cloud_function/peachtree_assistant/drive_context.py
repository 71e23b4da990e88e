import io
import logging
from concurrent.futures import ThreadPoolExecutor

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload

from . import config
from .google_clients import build_drive

logger = logging.getLogger(__name__)


def find_folder_id(drive, name: str = config.FOLDER_NAME):
    """Return the id of the first non-trashed folder called exactly `name`, or None."""
    query = f"name='{name}' and mimeType='{config.FOLDER_MIME_TYPE}' and trashed=false"
    resp = drive.files().list(q=query, fields="files(id)", pageSize=1).execute()
    files = resp.get("files", [])
    if not files:
        return None
    return files[0]["id"]


def list_folder_files(drive, folder_id: str) -> list[dict]:
    results = []
    page_token = None
    while True:
        resp = drive.files().list(
            q=f"'{folder_id}' in parents and trashed=false",
            fields="nextPageToken, files(id, name, mimeType)",
            pageToken=page_token,
        ).execute()
        results.extend(resp.get("files", []))
        page_token = resp.get("nextPageToken")
        if not page_token:
            break
    return results


def export_mime_type_for(mime_type: str):
    """Which MIME type to export as, or None when the file can't be read as text."""
    if mime_type == config.GOOGLE_DOC_MIME_TYPE:
        return "text/plain"
    if mime_type.startswith("text/"):
        return mime_type
    return None


def download_as_text_(request) -> str:
    fh = io.BytesIO()
    downloader = MediaIoBaseDownload(fh, request)
    done = False
    while not done:
        _, done = downloader.next_chunk()
    return fh.getvalue().decode("utf-8", errors="replace")


def get_drive_file_content(drive, file_id: str, mime_type: str, file_name: str) -> str:
    """
    Read a Drive file as text.

    Google Docs are exported as plain text and text/* files are exported with
    their own MIME type. If the export is rejected, the raw bytes are downloaded
    instead. Anything else yields "" without touching the network.

    Transport errors other than HttpError are left to the caller.
    """
    logger.debug("Reading file: %s (ID: %s, Type: %s)", file_name, file_id, mime_type)

    export_mime_type = export_mime_type_for(mime_type or "")
    if export_mime_type is None:
        logger.debug("Skipping unsupported file type: %s for file: %s", mime_type, file_name)
        return ""

    try:
        text = download_as_text_(drive.files().export_media(fileId=file_id, mimeType=export_mime_type))
        logger.debug("Read content from: %s", file_name)
        return text
    except HttpError as export_error:
        logger.debug("Export failed for %s: %s. Trying raw download...", file_name, export_error)

    try:
        text = download_as_text_(drive.files().get_media(fileId=file_id))
        logger.debug("Read content from %s using raw download.", file_name)
        return text
    except HttpError as fallback_error:
        logger.error("Raw download failed for %s: %s", file_name, fallback_error)
        return ""


def _read_file_or_empty(creds, drive_factory, file: dict) -> str:
    try:
        # Each worker needs its own service; the http transport is not thread-safe.
        drive = drive_factory(creds)
        return get_drive_file_content(drive, file["id"], file.get("mimeType", ""), file.get("name", ""))
    except Exception as e:
        logger.error("Could not read %s: %s", file.get("name", file.get("id")), e)
        return ""


def build_context(creds, files: list[dict], drive_factory=build_drive) -> str:
    """Read all files concurrently and join the non-empty texts in listing order."""
    if not files:
        return ""

    # One worker per file so every read is in flight at once
    with ThreadPoolExecutor(max_workers=len(files)) as pool:
        contents = list(pool.map(lambda f: _read_file_or_empty(creds, drive_factory, f), files))

    return config.CONTEXT_SEPARATOR.join(c for c in contents if c)


def load_folder_context(creds, drive_factory=build_drive) -> str:
    """Find the shared folder and build the grounding context from its files."""
    drive = drive_factory(creds)
    folder_id = find_folder_id(drive)
    if folder_id is None:
        logger.info("Folder %s not found; answering without context", config.FOLDER_NAME)
        return ""

    files = list_folder_files(drive, folder_id)
    logger.info("Found %d files in %s", len(files), config.FOLDER_NAME)
    return build_context(creds, files, drive_factory=drive_factory)
