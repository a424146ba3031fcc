import os

# Global environment settings
DINGTALK_WEBHOOK_URL = os.getenv("DINGTALK_WEBHOOK_URL")
DINGTALK_SECRET = os.getenv("DINGTALK_SECRET")
PROMETHEUS_QUERY_URL = os.getenv("PROMETHEUS_QUERY_URL")
APP_PORT = int(os.getenv("APP_PORT", "8080"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Timeout for every outbound call (DingTalk and Prometheus)
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "5"))

# Unmatched alert taxonomy renders an empty message; posting it is opt-in
SEND_EMPTY_MESSAGES = os.getenv("SEND_EMPTY_MESSAGES", "false").lower() == "true"
DINGTALK_MENTION_OWNER = os.getenv("DINGTALK_MENTION_OWNER", "false").lower() == "true"

ALERT_RECEIVER = os.getenv("ALERT_RECEIVER", "webhook_alert")

MESSAGE_TITLE = "Prometheus Alert"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

CPU_USAGE_QUERY = (
    '(1 - avg(rate(node_cpu_seconds_total{{mode="idle",instance="{instance}"}}[5m])) by (instance)) * 100'
)
CPU_USAGE_TEXT = "current utilization: {value:.2f}%"

HEADINGS = {
    "firing": "### Alert Firing",
    "resolved": "### Alert Resolved",
}

FIELD_LABELS = {
    "alertname": "Alert",
    "instance": "Instance",
    "namespace": "Namespace",
    "container": "Container",
    "severity": "Severity",
    "region": "Region",
    "description": "Description",
    "summary": "Summary",
    "runbook": "Runbook",
    "starts_at": "Start Time",
    "ends_at": "End Time",
}
RUNBOOK_LINK_TEXT = "View details"
