import sys
from challenger.config import RESEND_API_KEY, RESEND_FROM_EMAIL, APP_BASE_URL
import resend

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

def send_achievements_via_email(email: str, name: str, achievements) -> bool:
    """
    Tell a competitor about badges they just unlocked.

    - If RESEND_API_KEY is not set, just log to stderr (local dev).
    - Returns True only when Resend accepted the message.
    """
    email = normalize_email(email)
    if not email or not achievements:
        return False

    titles = ", ".join(a.name for a in achievements)

    # Dev / fallback path
    if not RESEND_API_KEY:
        print(f"[ACHIEVEMENT EMAIL - DEV ONLY] {email} -> {titles}", file=sys.stderr)
        return False

    items = "".join(
        f"<li><strong>{a.name}</strong> &mdash; {a.description}</li>"
        for a in achievements
    )
    html = f"""
      <div style="font-family: system-ui, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; padding: 16px;">
        <p>Nice work{', ' + name if name else ''} 💪</p>
        <p>Your latest verified result unlocked:</p>
        <ul style="margin: 12px 0;">{items}</ul>
        <p style="margin: 12px 0;">
          <a href="{APP_BASE_URL}/profile" style="display: inline-block; padding: 10px 14px; border-radius: 10px; background: #1a2942; color: #fff; text-decoration: none;">
            View your achievements
          </a>
        </p>
      </div>
    """

    try:
        resend.api_key = RESEND_API_KEY
        params = {
            "from": RESEND_FROM_EMAIL,
            "to": [email],
            "subject": f"Achievement unlocked: {titles}",
            "html": html,
        }
        resend.Emails.send(params)
        print(f"[ACHIEVEMENT EMAIL] Sent {len(achievements)} achievement(s) to {email}", file=sys.stderr)
        return True
    except Exception as e:
        # Don't fail the submission if email fails; just log it.
        print(f"[ACHIEVEMENT EMAIL] Failed to send via Resend: {e}", file=sys.stderr)
        return False
