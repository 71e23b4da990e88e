import os

from .errors import ConfigurationError

# Drive folder holding the documents the assistant answers from
FOLDER_NAME = "PeachTreeFiles"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"

CONTEXT_SEPARATOR = "\n\n---\n\n"

# Question log sheet
LOG_APPEND_RANGE = "A1"
LOG_READ_RANGE = "Sheet1!A:C"
REPORT_WINDOW_DAYS = 7

# Same-window popup flow: the browser hands us the code, no redirect page
OAUTH_REDIRECT_URI = "postmessage"
OAUTH_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
OAUTH_TOKEN_URI = "https://oauth2.googleapis.com/token"

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


def require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ConfigurationError(f"{name} env var not set.")
    return value


def gemini_api_key() -> str:
    return require_env("GEMINI_API_KEY")


def gemini_model() -> str:
    return os.environ.get("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL


def spreadsheet_id() -> str:
    return require_env("SPREADSHEET_ID")


def oauth_client_config() -> dict:
    return {
        "web": {
            "client_id": require_env("GOOGLE_CLIENT_ID"),
            "client_secret": require_env("GOOGLE_CLIENT_SECRET"),
            "auth_uri": OAUTH_AUTH_URI,
            "token_uri": OAUTH_TOKEN_URI,
        }
    }


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()
