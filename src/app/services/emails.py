"""Subject, HTML and plain-text bodies for account emails."""

from html import escape
from typing import NamedTuple
from urllib.parse import urlencode


class EmailContent(NamedTuple):
    subject: str
    html: str
    text: str


def build_link(app_url: str, path: str, token: str, email: str) -> str:
    query = urlencode({"token": token, "email": email})
    return f"{app_url.rstrip('/')}{path}?{query}"


def _button(label: str, href: str) -> str:
    return f'<p><a href="{escape(href, quote=True)}">{escape(label)}</a></p>'


def verification_email(verify_url: str, expires_in: str) -> EmailContent:
    html = (
        "<p>Thanks for signing up!</p>"
        "<p>Please confirm your email address by clicking the link below.</p>"
        f"{_button('Verify my email', verify_url)}"
        f"<p>This link expires in {escape(expires_in)}.</p>"
    )
    text = f"Verify your email by visiting: {verify_url} (this link expires in {expires_in})."
    return EmailContent("Verify Your Email Address", html, text)


def password_reset_email(reset_url: str, expires_in: str) -> EmailContent:
    html = (
        "<p>We received a request to reset your password.</p>"
        f"{_button('Reset my password', reset_url)}"
        f"<p>This link expires in {escape(expires_in)}. "
        "If you did not ask for a reset, you can ignore this email.</p>"
    )
    text = f"Reset your password by visiting: {reset_url} (this link expires in {expires_in})."
    return EmailContent("Reset Your Password", html, text)


def welcome_email(name: str, app_url: str) -> EmailContent:
    dashboard_url = f"{app_url.rstrip('/')}/dashboard"
    html = (
        f"<p>Welcome, {escape(name)}!</p>"
        "<p>Your account is ready.</p>"
        f"{_button('Go to dashboard', dashboard_url)}"
    )
    text = f"Welcome, {name}! Your account has been created. Visit {dashboard_url} to get started."
    return EmailContent("Welcome!", html, text)
