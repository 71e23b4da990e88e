from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from . import config


def credentials_from_token(access_token: str) -> Credentials:
    """Wrap a caller-supplied access token. Lives for one request, never refreshed."""
    return Credentials(token=access_token)


def build_drive(creds):
    return build("drive", "v3", credentials=creds, cache_discovery=False)


def build_sheets(creds):
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def build_oauth2(creds):
    return build("oauth2", "v2", credentials=creds, cache_discovery=False)


def exchange_code(code: str) -> str:
    """Trade an authorization code from the browser popup for an access token."""
    flow = Flow.from_client_config(
        config.oauth_client_config(),
        scopes=None,
        redirect_uri=config.OAUTH_REDIRECT_URI,
    )
    flow.fetch_token(code=code)
    return flow.credentials.token
