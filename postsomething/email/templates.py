"""Email templates for PostSomething."""

from datetime import datetime
from html import escape


BASE_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title} - PostSomething</title>
</head>
<body style="margin: 0; padding: 0; background-color: #FAFBFC; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;">
  <table role="presentation" width="100%" cellpadding="0" cellspacing="0" style="background-color: #FAFBFC;">
    <tr>
      <td align="center" style="padding: 40px 20px;">
        <table role="presentation" width="600" cellpadding="0" cellspacing="0" style="background-color: #FFFFFF; border-radius: 12px; max-width: 600px;">
          <tr>
            <td style="padding: 32px 40px 24px; text-align: center; border-bottom: 1px solid #E5E7EB;">
              <h1 style="margin: 0; font-size: 28px; font-weight: 700; color: #1F2937;">PostSomething</h1>
            </td>
          </tr>
          <tr>
            <td style="padding: 40px;">
              {content}
            </td>
          </tr>
          <tr>
            <td style="padding: 24px 40px; background-color: #F9FAFB; border-top: 1px solid #E5E7EB; border-radius: 0 0 12px 12px;">
              <p style="margin: 0; font-size: 12px; color: #8E959E; text-align: center; line-height: 1.6;">
                &copy; {year} PostSomething.<br>
                This email was sent automatically, please do not reply.
              </p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""


# ==============================================================================
# Template: Account Confirmation
# ==============================================================================

ACCOUNT_CONFIRMATION_CONTENT = """
<h1 style="margin: 0 0 16px; font-size: 24px; font-weight: 600; color: #1A1D23;">
  Confirm your account
</h1>

<p style="margin: 0 0 24px; font-size: 16px; color: #4B5563; line-height: 1.6;">
  Hello, <strong style="color: #1A1D23;">{user_name}</strong>!<br><br>
  Please confirm your account by <a href="{link}">clicking here</a>.
</p>

<p style="margin: 24px 0 0; font-size: 14px; color: #6B7280; line-height: 1.6;">
  The link expires in {expires_hours} hours.
</p>
"""


def render_account_confirmation(
    user_name: str, link: str, expires_hours: int
) -> tuple[str, str]:
    """Render the account confirmation email.

    Args:
        user_name: User's display name
        link: Absolute confirmation URL
        expires_hours: Token lifetime shown to the user

    Returns:
        Tuple of (html_content, plain_text_content)
    """
    content = ACCOUNT_CONFIRMATION_CONTENT.format(
        user_name=escape(user_name),
        link=escape(link, quote=True),
        expires_hours=expires_hours,
    )
    html = BASE_TEMPLATE.format(
        title="Confirm your account",
        content=content,
        year=datetime.now().year,
    )

    plain_text = f"""
Confirm your account - PostSomething

Hello, {user_name}!

Please confirm your account by opening this link:
{link}

The link expires in {expires_hours} hours.
"""
    return html, plain_text.strip()
