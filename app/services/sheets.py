"""
Google Sheets mirror for contact submissions.

Every stored submission is appended as one row to the configured sheet.
The append runs as a background task after the response has been sent;
its failures are logged and never reach the visitor.
"""

import logging
from datetime import datetime, timezone

import httplib2
from google.oauth2 import service_account
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build

from app.core.config import Settings
from app.core.errors import ExternalSideEffectError
from app.db.models.contact import as_utc

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetsClient:
    def __init__(self, spreadsheet_id: str, sheet_range: str, service, credentials=None):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range
        self._service = service
        self._credentials = credentials

    @classmethod
    def from_settings(cls, settings: Settings) -> "SheetsClient":
        credentials = service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "client_email": settings.google_service_account_email,
                "private_key": settings.google_private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=SCOPES,
        )
        service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return cls(settings.google_spreadsheet_id, settings.google_sheet_range, service, credentials)

    def _new_http(self):
        # httplib2.Http is not thread-safe and background tasks run on a thread pool
        if self._credentials is None:
            return None
        return AuthorizedHttp(self._credentials, http=httplib2.Http())

    def append_contact(self, data: dict) -> dict:
        submitted_at = as_utc(data.get("submitted_at") or datetime.now(timezone.utc))
        row = [
            data["name"],
            data["email"],
            data["phone"],
            data["message"],
            submitted_at.isoformat(),
        ]
        return self._service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=self.sheet_range,
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [row]},
        ).execute(http=self._new_http())


def append_contact_row(client: SheetsClient, data: dict) -> None:
    try:
        result = client.append_contact(data)
    except Exception as e:
        err = ExternalSideEffectError(f"sheets append failed: {e}")
        logger.error("Failed to append contact to Google Sheet: %s", err, exc_info=True)
        return

    updates = (result or {}).get("updates", {})
    logger.info("Appended contact to Google Sheet range %s", updates.get("updatedRange"))
