"""HTML templates for transactional emails and the unsubscribe landing page.

All user-supplied values are escaped. Marketing ``content`` is operator HTML
and is inserted as-is.
"""

from datetime import date
from html import escape
from typing import Optional

# Genitive month names, as used in Czech long dates ("10. března 2026")
CZECH_MONTHS = (
    "ledna", "února", "března", "dubna", "května", "června",
    "července", "srpna", "září", "října", "listopadu", "prosince",
)

BODY_STYLE = (
    "font-family: 'Montserrat', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, "
    "'Helvetica Neue', Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; "
    "margin: 0 auto; padding: 20px; background-color: #f5f5f5;"
)


def format_czech_date(value: date) -> str:
    return f"{value.day}. {CZECH_MONTHS[value.month - 1]} {value.year}"


def _layout(title: str, body: str, footer_extra: str = "", preheader: Optional[str] = None) -> str:
    hidden = ""
    meta = ""
    if preheader:
        meta = f'<meta name="description" content="{escape(preheader)}">'
        hidden = f'<div style="display: none; max-height: 0; overflow: hidden;">{escape(preheader)}</div>'

    return f"""<!DOCTYPE html>
<html lang="cs">
<head>
	<meta charset="UTF-8">
	<meta name="viewport" content="width=device-width, initial-scale=1.0">
	<title>{escape(title)}</title>
	{meta}
</head>
<body style="{BODY_STYLE}">
	{hidden}
	<div style="background-color: #c6dbad; padding: 25px 30px; border-radius: 8px 8px 0 0; text-align: center;">
		<h1 style="margin: 0; font-size: 22px; color: #333; font-weight: 600;">VIN Info.cz</h1>
	</div>

	<div style="background: #ffffff; padding: 30px; border-left: 1px solid #e9ecef; border-right: 1px solid #e9ecef;">
		{body}
	</div>

	<div style="background: #f8f9fa; padding: 20px; border-radius: 0 0 8px 8px; border: 1px solid #e9ecef; border-top: none; text-align: center; font-size: 12px; color: #888;">
		<p style="margin: 0 0 10px;">Tento email byl odeslán ze služby <a href="https://vininfo.cz" style="color: #555; text-decoration: none;">VIN Info.cz</a></p>
		{footer_extra}
	</div>
</body>
</html>"""


def render_verification_email(code: str, ttl_hours: int) -> tuple[str, str]:
    """Return (subject, html) for the verification-code email."""
    body = f"""<h2 style="color: #333; margin-top: 0; font-size: 20px;">Vítejte v Moje VINInfo!</h2>
		<p style="color: #555;">Pro dokončení registrace zadejte následující ověřovací kód:</p>
		<div style="background: #c6dbad; padding: 25px; border-radius: 8px; margin: 25px 0; text-align: center;">
			<p style="margin: 0; font-size: 36px; font-weight: bold; letter-spacing: 10px; color: #333;">{escape(code)}</p>
		</div>
		<p style="color: #555;">Kód je platný {ttl_hours} hodin od odeslání.</p>
		<p style="color: #888; font-size: 14px; margin-top: 25px;">
			Pokud jste si nevytvořili účet na VIN Info.cz, tento email můžete ignorovat.
		</p>"""
    return "Ověřovací kód pro VINInfo", _layout("Ověření emailu - VIN Info.cz", body)


def render_reminder_email(
    vehicle_name: str,
    type_label: str,
    due_date: date,
    note: Optional[str],
    unsubscribe_url: str,
    base_url: str,
) -> tuple[str, str]:
    """Return (subject, html) for a reminder notification."""
    note_html = ""
    if note:
        note_html = f'<p style="margin: 10px 0 0; color: #333;"><strong>Poznámka:</strong> {escape(note)}</p>'

    body = f"""<h2 style="color: #333; margin-top: 0; font-size: 20px;">Blíží se termín: {escape(type_label)}</h2>
		<div style="background: #c6dbad; padding: 20px; border-radius: 8px; margin: 20px 0;">
			<p style="margin: 0 0 10px; color: #333;"><strong>Vozidlo:</strong> {escape(vehicle_name)}</p>
			<p style="margin: 0 0 10px; color: #333;"><strong>Typ upozornění:</strong> {escape(type_label)}</p>
			<p style="margin: 0; color: #333;"><strong>Termín:</strong> <span style="color: #c0392b; font-weight: bold;">{format_czech_date(due_date)}</span></p>
			{note_html}
		</div>
		<p style="color: #555;">Nezapomeňte si včas zajistit splnění tohoto termínu. V případě potřeby můžete termín upravit v klientské zóně.</p>
		<div style="text-align: center; margin: 30px 0;">
			<a href="{escape(base_url)}/klientska-zona" style="display: inline-block; background: #5a8f3e; color: white; padding: 12px 30px; text-decoration: none; border-radius: 5px; font-weight: 600;">Přejít do Moje VINInfo</a>
		</div>"""
    footer = (
        f'<p style="margin: 0;"><a href="{escape(unsubscribe_url)}" style="color: #888;">'
        "Odhlásit se z odběru notifikací</a></p>"
    )
    subject = f"Připomínka: {type_label} - {vehicle_name}"
    return subject, _layout("Připomínka - VIN Info.cz", body, footer)


def render_marketing_email(
    subject: str,
    heading: str,
    content: str,
    unsubscribe_url: str,
    preheader: Optional[str] = None,
    cta_text: Optional[str] = None,
    cta_url: Optional[str] = None,
) -> str:
    cta = ""
    if cta_text and cta_url:
        cta = f"""<div style="text-align: center; margin: 30px 0;">
			<a href="{escape(cta_url)}" style="display: inline-block; background-color: #333; color: #ffffff; padding: 14px 28px; text-decoration: none; border-radius: 6px; font-weight: 600;">{escape(cta_text)}</a>
		</div>"""

    body = f"""<h2 style="color: #333; margin-top: 0; font-size: 20px;">{escape(heading)}</h2>
		<div style="color: #555;">
			{content}
		</div>
		{cta}"""
    footer = (
        f'<p style="margin: 0;"><a href="{escape(unsubscribe_url)}" style="color: #888; text-decoration: underline;">'
        "Odhlásit se z marketingových emailů</a></p>"
    )
    return _layout(subject, body, footer, preheader=preheader)


def render_unsubscribe_page(title: str, message: str, success: bool) -> str:
    """Standalone confirmation/error page for the unsubscribe link."""
    bg_color = "#d4edda" if success else "#f8d7da"
    text_color = "#155724" if success else "#721c24"

    return f"""<!DOCTYPE html>
<html lang="cs">
<head>
	<meta charset="UTF-8">
	<meta name="viewport" content="width=device-width, initial-scale=1.0">
	<title>{escape(title)} - VINInfo</title>
	<style>
		body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; display: flex; justify-content: center; align-items: center; min-height: 100vh; margin: 0; background-color: #f5f5f5; }}
		.container {{ text-align: center; padding: 40px; background: white; border-radius: 8px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); max-width: 500px; }}
		.alert {{ padding: 15px; border-radius: 4px; background-color: {bg_color}; color: {text_color}; margin-bottom: 20px; }}
		h1 {{ margin: 0 0 20px; color: #333; }}
		p {{ color: #666; line-height: 1.6; }}
		a {{ color: #007bff; text-decoration: none; }}
	</style>
</head>
<body>
	<div class="container">
		<h1>{escape(title)}</h1>
		<div class="alert">{escape(message)}</div>
		<p><a href="/">Zpět na VINInfo</a></p>
	</div>
</body>
</html>"""
