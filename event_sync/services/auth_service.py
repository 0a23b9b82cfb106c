"""Credential loading and token acquisition for the Google Calendar API.

Tokens are persisted in the authorized-user JSON format produced by
``google.oauth2.credentials.Credentials.to_json()``.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Optional

from google.auth.exceptions import RefreshError
from google.auth.exceptions import TransportError as GoogleTransportError
from google.auth.transport.requests import Request as GoogleRequest
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from ..errors import AuthError, SerializationError, TransportError

logger = logging.getLogger(__name__)

GOOGLE_SCOPES = [
    'https://www.googleapis.com/auth/calendar.readonly',
    'https://www.googleapis.com/auth/calendar.events',
]


def load_credentials(token_path: str) -> Credentials:
    """Load credentials from ``token_path``, refreshing and re-saving them if needed."""
    path = Path(token_path)
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise AuthError("TOKEN_FILE_NOT_FOUND", f"Couldn't load token file: {token_path}")
    except OSError as e:
        raise AuthError("TOKEN_FILE_UNREADABLE", f"Couldn't load token file {token_path}: {e}")

    try:
        info = json.loads(contents)
        credentials = Credentials.from_authorized_user_info(info)
    except (ValueError, TypeError, AttributeError) as e:
        raise SerializationError("TOKEN_FILE_INVALID", f"Failed to parse token file {token_path}: {e}")

    if credentials.valid:
        return credentials
    if not credentials.refresh_token:
        raise AuthError("TOKEN_EXPIRED", "Token expired and no refresh token available")

    try:
        credentials.refresh(GoogleRequest())
    except RefreshError as e:
        raise AuthError("TOKEN_REFRESH_FAILED", f"Failed to refresh token: {e}")
    except GoogleTransportError as e:
        raise TransportError("TOKEN_REFRESH_TRANSPORT", f"Failed to reach the token endpoint: {e}") from e
    try:
        path.write_text(credentials.to_json(), encoding="utf-8")
    except OSError as e:
        raise AuthError("TOKEN_FILE_UNWRITABLE", f"Couldn't save refreshed token to {token_path}: {e}") from e
    logger.info("Refreshed access token saved to %s", token_path)
    return credentials


def obtain_token(
    client_secret_path: str,
    output_path: str,
    scopes: Optional[List[str]] = None,
    port: int = 0,
    open_browser: bool = True,
) -> Credentials:
    """Run the installed-app OAuth flow and write the resulting token file."""
    try:
        flow = InstalledAppFlow.from_client_secrets_file(client_secret_path, scopes or GOOGLE_SCOPES)
    except FileNotFoundError:
        raise SerializationError("CLIENT_SECRET_NOT_FOUND", f"Couldn't load client secret: {client_secret_path}")
    except ValueError as e:
        raise SerializationError("CLIENT_SECRET_INVALID", f"Failed to read client secret {client_secret_path}: {e}")

    credentials = flow.run_local_server(port=port, open_browser=open_browser)
    if not credentials.refresh_token:
        logger.warning("No refresh token granted; the token file will stop working once it expires")
    Path(output_path).write_text(credentials.to_json(), encoding="utf-8")
    logger.info("Token written to %s", output_path)
    return credentials
