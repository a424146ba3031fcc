"""Sample Alertmanager payloads shared by the test modules."""

import copy

NODE_ALERT = {
    "status": "firing",
    "labels": {
        "alertname": "NodeHighCPU",
        "instance": "10.0.0.7:9100",
        "job": "node-exporter",
        "region": "cn-hangzhou",
        "severity": "warning",
        "owner": "13800000000",
    },
    "annotations": {
        "additionalInfo": "node",
        "description": "CPU usage above 90%",
        "summary": "CPU saturated for 5m",
    },
    "startsAt": "2025-10-08T14:33:30.123456789Z",
    "endsAt": "0001-01-01T00:00:00Z",
    "generatorURL": "http://prometheus:9090/graph?g0.expr=up",
    "fingerprint": "0f1e2d3c4b5a6978",
}

K8S_ALERT = {
    "status": "firing",
    "labels": {
        "alertname": "PodCrashLooping",
        "instance": "10.0.0.5",
        "namespace": "prod",
        "container": "api",
        "severity": "warning",
    },
    "annotations": {
        "additionalInfo": "k8s",
        "description": "pod restarting",
        "summary": "5 restarts in 10m",
        "runbook_url": "",
    },
    "startsAt": "2025-10-08T14:33:30Z",
    "endsAt": "0001-01-01T00:00:00Z",
    "generatorURL": "",
}


def make_payload(*alerts, receiver="webhook_alert", status="firing", severity="critical"):
    return {
        "receiver": receiver,
        "status": status,
        "alerts": [copy.deepcopy(a) for a in alerts],
        "groupLabels": {"alertname": alerts[0]["labels"]["alertname"] if alerts else ""},
        "commonLabels": {"severity": severity},
        "commonAnnotations": {},
        "externalURL": "http://alertmanager:9093",
        "version": "4",
        "groupKey": "{}:{alertname=\"test\"}",
    }


def resolved(alert, ends_at="2025-10-08T16:29:55.933582749Z"):
    alert = copy.deepcopy(alert)
    alert["status"] = "resolved"
    alert["endsAt"] = ends_at
    return alert
