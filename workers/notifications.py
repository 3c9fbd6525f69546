"""
Email notifications for new submissions, sent through Resend.

Best effort only: notify() hands the record to the dispatch queue and
returns immediately. A missing RESEND_API_KEY / EMAIL_FROM / EMAIL_TO
disables the sink without error.
"""

import html
from typing import Optional

import requests

from config import Settings
from errors import NotificationError
from models import PainPointRecord
from utils.logging import get_logger
from .dispatch import DispatchQueue

logger = get_logger(__name__)

RESEND_URL = "https://api.resend.com/emails"


def build_subject(record: PainPointRecord) -> str:
    prefix = "New Public Pain Point" if record.is_anonymous else "New Pain Point Submitted"
    return f"{prefix}: {record.industry or 'Unknown Industry'}"


def build_html(record: PainPointRecord) -> str:
    """Render the notification body. Every field is escaped."""
    def e(value) -> str:
        return html.escape(str(value))

    return f"""
<h1>New Pain Point Submission</h1>
<p><strong>ID:</strong> {e(record.id)}</p>
<p><strong>Description:</strong></p>
<pre>{e(record.description)}</pre>
<hr>
<h2>Classification Results:</h2>
<ul>
  <li><strong>Industry:</strong> {e(record.industry)}</li>
  <li><strong>Sentiment:</strong> {e(record.sentiment)}</li>
  <li><strong>Confidence Score:</strong> {e(record.confidence_score)}</li>
  <li><strong>Confidence Explanation:</strong> {e(record.confidence_explanation)}</li>
</ul>
<p><em>Submitted At: {e(record.created_at)}</em></p>
""".strip()


class NotificationSink:
    """Sends one email per stored pain point."""

    def __init__(
        self,
        settings: Settings,
        dispatcher: Optional[DispatchQueue] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self.settings = settings
        self.dispatcher = dispatcher or DispatchQueue(name="notifications")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return self.settings.notifications_enabled

    def notify(self, record: PainPointRecord) -> bool:
        """
        Queue a notification for a stored record.

        Returns True if queued, False if the sink is disabled. Never raises.
        """
        if not self.enabled:
            logger.debug("Email configuration missing; skipping notification for %s", record.id)
            self.dispatcher.stats.record_skip()
            return False

        try:
            self.dispatcher.submit(lambda: self.send(record), label=f"email:{record.id}")
        except Exception as e:
            logger.warning("Could not queue notification for %s: %s", record.id, e)
            return False
        return True

    def send(self, record: PainPointRecord) -> None:
        """
        Deliver the email now.

        Raises:
            NotificationError: transport failure or non-2xx from Resend
        """
        payload = {
            "from": self.settings.email_from,
            "to": [self.settings.email_to],
            "subject": build_subject(record),
            "html": build_html(record),
        }
        headers = {
            "Authorization": f"Bearer {self.settings.resend_api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = self.session.post(RESEND_URL, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationError(f"Email request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise NotificationError(f"Resend error [{response.status_code}]: {response.text[:300]}")

        logger.info("Email notification sent for %s to %s", record.id, self.settings.email_to)

    def start(self):
        self.dispatcher.start()

    def stop(self, timeout: float = 5.0) -> dict:
        """Drain and stop the queue. Returns the final delivery stats."""
        if self.dispatcher.is_running():
            self.dispatcher.stop(timeout=timeout)

        stats = self.dispatcher.stats
        if stats.is_healthy:
            logger.info("Notification queue stopped: %s", stats.to_dict())
        else:
            logger.warning(
                "Notification queue stopped with %d/%d failed deliveries (last: %s)",
                stats.errors, stats.runs, stats.last_error_message,
            )
        return stats.to_dict()
