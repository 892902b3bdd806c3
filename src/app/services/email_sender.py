from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    text: str
    html: str


class IEmailSender(ABC):
    """Outbound email collaborator - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, text: str, html: str) -> bool:
        """Deliver one message. Returns False if the transport failed."""
        pass


def otp_email_template(code: str, ttl_minutes: int = 10, brand: str = "Ngozi Umoru") -> EmailMessage:
    """Build the verification-code email"""
    year = datetime.utcnow().year
    text = (
        f"Your verification code is: {code}\n\n"
        f"This code will expire in {ttl_minutes} minutes.\n\n"
        "If you did not request this code, please ignore this email."
    )
    html = f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
          <h1 style="color: #00afef; margin: 0;">{brand}</h1>
        </div>
        <div style="background: #f9fafb; border-radius: 12px; padding: 30px; text-align: center;">
          <h2 style="color: #1f2937; margin-top: 0;">Verify Your Email</h2>
          <p style="color: #6b7280; font-size: 16px;">Use the verification code below to complete your login:</p>
          <div style="background: #00afef; border-radius: 8px; padding: 20px; margin: 20px 0;">
            <span style="font-size: 32px; font-weight: bold; color: white; letter-spacing: 8px;">{code}</span>
          </div>
          <p style="color: #9ca3af; font-size: 14px;">This code will expire in <strong>{ttl_minutes} minutes</strong>.</p>
          <p style="color: #9ca3af; font-size: 12px;">If you did not request this verification code, you can safely ignore this email.</p>
        </div>
        <div style="text-align: center; margin-top: 20px;">
          <p style="color: #9ca3af; font-size: 12px;">&copy; {year} {brand}. All rights reserved.</p>
        </div>
      </div>
    """
    return EmailMessage(
        subject=f"Your Verification Code - {brand}",
        text=text,
        html=html,
    )
