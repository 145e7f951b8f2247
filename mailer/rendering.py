from django.conf import settings
from django.template.loader import render_to_string
from django.utils.html import strip_tags

# key -> (default subject, html template)
EMAIL_TEMPLATES = {
    "invite": ("Convite - Nosso Templo", "emails/invite.html"),
    "approval": ("Cadastro aprovado - Nosso Templo", "emails/approval.html"),
    "rejection": ("Cadastro não aprovado - Nosso Templo", "emails/rejection.html"),
    "custom": ("Nosso Templo", "emails/custom.html"),
}

def render_email(key, context, subject=None):
    default_subject, html_template_path = EMAIL_TEMPLATES[key]
    context = {"site_url": settings.SITE_URL.rstrip("/"), **context}
    html_body = render_to_string(html_template_path, context)
    text_body = strip_tags(html_body).strip()
    return subject or default_subject, text_body, html_body
