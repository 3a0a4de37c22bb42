import smtplib
from datetime import datetime
from email.mime.text import MIMEText
from typing import Optional
from ..config import SmtpSettings
from ..models import Outcome

SUBJECT = "YouTube Notion digest completed"


def build_message(settings: SmtpSettings, now: Optional[datetime] = None) -> MIMEText:
    now = now or datetime.now()
    body = f"Daily YouTube → Notion digest finished at {now.strftime('%Y-%m-%d %H:%M:%S')}."
    msg = MIMEText(body, "plain", "utf-8")
    msg["Subject"] = SUBJECT
    msg["From"] = settings.sender or settings.user
    msg["To"] = settings.recipient
    return msg


def send_completion_email(settings: SmtpSettings, now: Optional[datetime] = None) -> Outcome:
    if not settings.host or not settings.recipient:
        print("WARNING: SMTP_HOST or NOTIFICATION_EMAIL not set. Skipping completion email.")
        return Outcome.failure("smtp not configured")

    msg = build_message(settings, now)
    try:
        with smtplib.SMTP(settings.host, settings.port) as smtp:
            smtp.starttls()
            if settings.user:
                smtp.login(settings.user, settings.password)
            smtp.send_message(msg)
        return Outcome.success(settings.recipient)
    except Exception as e:
        print(f"Error sending completion email: {e}")
        return Outcome.failure(e)
