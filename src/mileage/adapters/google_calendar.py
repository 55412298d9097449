"""Google Calendar API adapter."""

import logging
from pathlib import Path

from mileage.core.events import EventPage, RawEvent
from mileage.core.report import TimeRange
from mileage.errors import AuthenticationError, ExternalServiceError, RateLimitError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]
MAX_PAGE_SIZE = 100

_RATE_LIMIT_REASONS = (b"ratelimitexceeded", b"userratelimitexceeded")


def _is_rate_limited(error) -> bool:
    """True for HTTP 429, or a 403 carrying a rate-limit reason."""
    status = getattr(error.resp, "status", None)
    if status == 429:
        return True
    content = (error.content or b"").lower()
    return status == 403 and any(reason in content for reason in _RATE_LIMIT_REASONS)


class GoogleCalendarAdapter:
    """
    Lists events from one Google Calendar via the API.

    Implements EventSource protocol. The built service is the run's
    authenticated session and is reused across page requests.
    """

    def __init__(
        self,
        config_folder: str,
        calendar_id: str = "primary",
        client_secret_file: str = "",
    ):
        self.config_folder = config_folder
        self.calendar_id = calendar_id
        self.client_secret_file = client_secret_file
        self._token_path = Path(config_folder).expanduser() / "token.json"
        self._service = None

    @property
    def token_path(self) -> Path:
        return self._token_path

    def _get_credentials(self):
        """Load credentials from token.json, refreshing if needed."""
        from google.auth.exceptions import RefreshError, TransportError
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        if not self._token_path.exists():
            raise AuthenticationError(f"No token at {self._token_path} - run 'mileage auth'")

        try:
            creds = Credentials.from_authorized_user_file(str(self._token_path), SCOPES)
        except ValueError as e:
            raise AuthenticationError(f"Unreadable token at {self._token_path}: {e}") from e

        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as e:
                raise AuthenticationError(f"Failed to refresh token - run 'mileage auth': {e}") from e
            except TransportError as e:
                raise AuthenticationError(f"Could not reach Google to refresh token: {e}") from e
            self._token_path.write_text(creds.to_json())
            self._token_path.chmod(0o600)

        if not creds.valid:
            raise AuthenticationError("Stored token is invalid - run 'mileage auth'")

        return creds

    def _build_service(self):
        """Build (once) a Google Calendar API service."""
        from googleapiclient.discovery import build

        if self._service is None:
            self._service = build("calendar", "v3", credentials=self._get_credentials())
        return self._service

    def authenticate(self) -> bool:
        """Run OAuth flow and store the token. Returns True on success."""
        from google_auth_oauthlib.flow import InstalledAppFlow

        if not self.client_secret_file:
            logger.error("No client secret file configured")
            return False

        secret_path = Path(self.client_secret_file).expanduser()
        if not secret_path.exists():
            logger.error(f"Client secret file not found: {secret_path}")
            return False

        flow = InstalledAppFlow.from_client_secrets_file(str(secret_path), SCOPES)
        creds = flow.run_local_server(port=0)

        token_dir = self._token_path.parent
        token_dir.mkdir(parents=True, exist_ok=True)
        self._token_path.write_text(creds.to_json())
        self._token_path.chmod(0o600)
        self._service = None
        return True

    def verify(self) -> bool:
        """Check the stored token with a minimal API call."""
        import httplib2
        from googleapiclient.errors import HttpError

        try:
            service = self._build_service()
            service.calendarList().list(maxResults=1).execute()
        except (AuthenticationError, HttpError, httplib2.HttpLib2Error, OSError) as e:
            logger.info(f"Stored tokens are invalid or expired: {e}")
            return False
        return True

    def list_events(
        self,
        time_range: TimeRange,
        page_token: str | None = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> EventPage:
        """Fetch one page of single-instance events ordered by start time."""
        import httplib2
        from googleapiclient.errors import HttpError

        service = self._build_service()
        params = {
            "calendarId": self.calendar_id,
            "timeMin": time_range.start.isoformat(),
            "timeMax": time_range.end.isoformat(),
            "singleEvents": True,
            "orderBy": "startTime",
            "maxResults": max(1, min(page_size, MAX_PAGE_SIZE)),
        }
        if page_token:
            params["pageToken"] = page_token

        try:
            result = service.events().list(**params).execute()
        except HttpError as e:
            if _is_rate_limited(e):
                logger.error("Hit Google Calendar API rate limit. Please try again later.")
                raise RateLimitError("Google Calendar API rate limit exceeded") from e
            raise ExternalServiceError(f"Google Calendar API error: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise ExternalServiceError(f"Could not reach Google Calendar: {e}") from e

        items = []
        for item in result.get("items", []):
            try:
                items.append(RawEvent.from_api(item))
            except ValueError as e:
                logger.warning(f"Skipping malformed event: {e}")

        return EventPage(items=items, next_page_token=result.get("nextPageToken"))
