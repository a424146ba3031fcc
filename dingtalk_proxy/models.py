import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import MESSAGE_TITLE
from .utils import parse_timestamp


class PayloadDecodeError(ValueError):
    """Inbound body is not a usable Alertmanager notification."""


def _string_map(value: Any, field_name: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PayloadDecodeError(f"'{field_name}' must be an object, got {type(value).__name__}")
    return {str(k): '' if v is None else str(v) for k, v in value.items()}


def _timestamp(value: Any, field_name: str) -> Optional[datetime]:
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError) as exc:
        raise PayloadDecodeError(f"invalid '{field_name}': {value!r}") from exc


@dataclass(frozen=True)
class Alert:
    labels: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, str] = field(default_factory=dict)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    status: str = ''
    generator_url: str = ''
    fingerprint: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'Alert':
        if not isinstance(data, dict):
            raise PayloadDecodeError(f"alert must be an object, got {type(data).__name__}")
        return cls(
            labels=_string_map(data.get('labels'), 'labels'),
            annotations=_string_map(data.get('annotations'), 'annotations'),
            starts_at=_timestamp(data.get('startsAt'), 'startsAt'),
            ends_at=_timestamp(data.get('endsAt'), 'endsAt'),
            status=str(data.get('status') or ''),
            generator_url=str(data.get('generatorURL') or ''),
            fingerprint=str(data.get('fingerprint') or ''),
        )

    def label(self, key: str) -> str:
        return self.labels.get(key, '')

    def annotation(self, key: str) -> str:
        return self.annotations.get(key, '')

    @property
    def alertname(self) -> str:
        return self.label('alertname')

    @property
    def instance(self) -> str:
        return self.label('instance')

    @property
    def namespace(self) -> str:
        return self.label('namespace')

    @property
    def container(self) -> str:
        return self.label('container')

    @property
    def region(self) -> str:
        return self.label('region')

    @property
    def severity(self) -> str:
        return self.label('severity')

    @property
    def owner(self) -> str:
        return self.label('owner')

    @property
    def additional_info(self) -> str:
        return self.annotation('additionalInfo')

    @property
    def description(self) -> str:
        return self.annotation('description')

    @property
    def summary(self) -> str:
        return self.annotation('summary')

    @property
    def runbook_url(self) -> str:
        return self.annotation('runbook_url')


@dataclass(frozen=True)
class AlertBatch:
    """One Alertmanager webhook notification.

    ``common_labels``/``common_annotations`` hold what every alert of the group
    shares; templates read the severity from there rather than per alert.
    """

    receiver: str = ''
    status: str = ''
    alerts: Tuple[Alert, ...] = ()
    group_labels: Mapping[str, str] = field(default_factory=dict)
    common_labels: Mapping[str, str] = field(default_factory=dict)
    common_annotations: Mapping[str, str] = field(default_factory=dict)
    external_url: str = ''
    version: str = ''
    group_key: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'AlertBatch':
        if not isinstance(data, dict):
            raise PayloadDecodeError(f"payload must be an object, got {type(data).__name__}")
        alerts = data.get('alerts')
        if alerts is None:
            alerts = []
        if not isinstance(alerts, list):
            raise PayloadDecodeError("'alerts' must be a list")
        return cls(
            receiver=str(data.get('receiver') or ''),
            status=str(data.get('status') or ''),
            alerts=tuple(Alert.from_dict(a) for a in alerts),
            group_labels=_string_map(data.get('groupLabels'), 'groupLabels'),
            common_labels=_string_map(data.get('commonLabels'), 'commonLabels'),
            common_annotations=_string_map(data.get('commonAnnotations'), 'commonAnnotations'),
            external_url=str(data.get('externalURL') or ''),
            version=str(data.get('version') or ''),
            group_key=str(data.get('groupKey') or ''),
        )

    @property
    def common_severity(self) -> str:
        return self.common_labels.get('severity', '')


@dataclass(frozen=True)
class OutboundMessage:
    text: str
    title: str = MESSAGE_TITLE
    at_mobiles: Tuple[str, ...] = ()
    is_at_all: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            'msgtype': 'markdown',
            'markdown': {'title': self.title, 'text': self.text},
            'at': {'atMobiles': list(self.at_mobiles), 'isAtAll': self.is_at_all},
        }


@dataclass(frozen=True)
class MetricSample:
    instance: str
    timestamp: float
    value: str


def parse_webhook_payload(raw) -> AlertBatch:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise PayloadDecodeError(f"body is not valid UTF-8: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(f"invalid JSON: {exc}") from exc
    return AlertBatch.from_dict(data)
