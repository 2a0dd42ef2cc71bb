import resend
import logging
from app.configs.app_settings import settings
from typing import Optional

logger = logging.getLogger(__name__)

resend.api_key = settings.RESEND_API_KEY


class EmailService:
    """Service for sending emails via Resend"""

    @staticmethod
    def send_worker_onboarding_notification(
        worker_id: str,
        full_name: Optional[str],
        email: Optional[str],
        service_type: Optional[str],
    ) -> bool:
        """
        Let the admin team know a worker finished onboarding and is waiting for approval
        Returns True if email sent successfully, False otherwise
        """
        if not settings.RESEND_API_KEY or not settings.ADMIN_NOTIFICATION_EMAIL:
            logger.info(f"Email notification skipped for worker {worker_id}: Resend is not configured")
            return False

        try:
            review_url = f"{settings.CLIENT_DOMAIN}/admin/workers/{worker_id}"
            html_content = f"""
            <html>
                <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
                    <h2 style="color: #2563eb;">🆕 New worker profile waiting for review</h2>

                    <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">
                        <p><strong>Worker ID:</strong> {worker_id}</p>
                        <p><strong>Name:</strong> {full_name or "Unknown"}</p>
                        <p><strong>Email:</strong> {email or "-"}</p>
                        <p><strong>Service type:</strong> {service_type or "-"}</p>
                        <p><a href="{review_url}">Open in admin panel</a></p>
                    </div>

                    <p style="color: #6b7280; font-size: 14px; margin-top: 30px;">
                        This is an automated notification.
                    </p>
                </body>
            </html>
            """

            params = {
                "from": settings.EMAIL_FROM,
                "to": [settings.ADMIN_NOTIFICATION_EMAIL],
                "subject": f"Worker onboarding completed: {full_name or worker_id}",
                "html": html_content,
            }

            email_result = resend.Emails.send(params)
            logger.info(f"✅ Email notification sent for worker {worker_id}: {email_result}")
            return True

        except Exception as e:
            logger.error(f"❌ Failed to send email notification for worker {worker_id}: {str(e)}")
            # email failure must not undo a completed onboarding
            return False
