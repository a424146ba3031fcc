from .constants import ALERT_RECEIVER, FIELD_LABELS, HEADINGS, RUNBOOK_LINK_TEXT
from .enrichment import get_cpu_usage_text
from .utils import format_timestamp

# (receiver, additionalInfo, status) -> render(batch, alert, cpu_usage) -> str
TEMPLATES = {}


def register_template(receiver, discriminator, status):
    def decorator(func):
        TEMPLATES[(receiver, discriminator, status)] = func
        return func
    return decorator


def _line(field, value):
    return f"- **{FIELD_LABELS[field]}**: {value}\n"


def _header(status, batch, alert, kubernetes=False):
    parts = [
        HEADINGS[status] + "\n",
        _line('alertname', alert.alertname),
        _line('instance', alert.instance),
    ]
    if kubernetes:
        parts.append(_line('namespace', alert.namespace))
        parts.append(_line('container', alert.container))
    parts.append(_line('severity', batch.common_severity))
    return parts


@register_template(ALERT_RECEIVER, 'node', 'firing')
def render_node_firing(batch, alert, cpu_usage):
    parts = _header('firing', batch, alert)
    parts.append(_line('region', alert.region))
    parts.append(_line('description', alert.description))
    parts.append(_line('summary', alert.summary))
    parts.append(_line('starts_at', format_timestamp(alert.starts_at)) + "\n")
    return "".join(parts)


@register_template(ALERT_RECEIVER, 'node', 'resolved')
def render_node_resolved(batch, alert, cpu_usage):
    # Resolved node alerts show the live CPU usage instead of the firing description
    current = cpu_usage(alert.instance) or alert.description
    parts = _header('resolved', batch, alert)
    parts.append(_line('description', current))
    parts.append(_line('summary', alert.summary))
    parts.append(_line('starts_at', format_timestamp(alert.starts_at)))
    parts.append(_line('ends_at', format_timestamp(alert.ends_at)) + "\n")
    return "".join(parts)


@register_template(ALERT_RECEIVER, 'k8s', 'firing')
def render_k8s_firing(batch, alert, cpu_usage):
    parts = _header('firing', batch, alert, kubernetes=True)
    parts.append(_line('description', alert.description))
    parts.append(_line('summary', alert.summary))
    if alert.runbook_url:
        parts.append(_line('runbook', f"[{RUNBOOK_LINK_TEXT}]({alert.runbook_url})"))
    parts.append(_line('starts_at', format_timestamp(alert.starts_at)) + "\n")
    return "".join(parts)


@register_template(ALERT_RECEIVER, 'k8s', 'resolved')
def render_k8s_resolved(batch, alert, cpu_usage):
    parts = _header('resolved', batch, alert, kubernetes=True)
    parts.append(_line('description', alert.description))
    parts.append(_line('summary', alert.summary))
    parts.append(_line('starts_at', format_timestamp(alert.starts_at)))
    parts.append(_line('ends_at', format_timestamp(alert.ends_at)) + "\n")
    return "".join(parts)


def template_status(batch, alert):
    """Firing is decided per alert, resolved by the group status."""
    if alert.status == 'firing':
        return 'firing'
    if batch.status == 'resolved':
        return 'resolved'
    return None


def resolve_template(batch, alert):
    status = template_status(batch, alert)
    if status is None:
        return None
    return TEMPLATES.get((batch.receiver, alert.additional_info, status))


def format_alert(batch, alert, cpu_usage=None):
    """Render one alert as DingTalk markdown; "" when no template applies."""
    render = resolve_template(batch, alert)
    if render is None:
        return ""
    return render(batch, alert, cpu_usage or get_cpu_usage_text)
