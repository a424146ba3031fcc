import math
from typing import Any, List

import requests

from .constants import (
    CPU_USAGE_QUERY,
    CPU_USAGE_TEXT,
    DEBUG_MODE,
    HTTP_TIMEOUT_SECONDS,
    PROMETHEUS_QUERY_URL,
)
from .models import MetricSample


class MetricQueryError(Exception):
    pass


def build_cpu_usage_query(instance: str) -> str:
    return CPU_USAGE_QUERY.format(instance=instance)


def parse_query_response(data: Any) -> List[MetricSample]:
    """Extract samples from an instant query body.

    Entries without a ``[timestamp, value]`` pair are skipped.
    """
    if not isinstance(data, dict):
        raise MetricQueryError(f"unexpected response type: {type(data).__name__}")
    if data.get('status') != 'success':
        raise MetricQueryError(f"query failed: {data.get('errorType', '')} {data.get('error', '')}".strip())

    payload = data.get('data')
    if not isinstance(payload, dict):
        raise MetricQueryError(f"unexpected 'data' field: {payload!r}")
    results = payload.get('result')
    if results is None:
        results = []
    if not isinstance(results, list):
        raise MetricQueryError(f"unexpected 'result' field: {results!r}")

    samples: List[MetricSample] = []
    for item in results:
        try:
            metric = item.get('metric') or {}
            ts, value = item['value']
            samples.append(MetricSample(
                instance=str(metric.get('instance', '')),
                timestamp=float(ts),
                value=str(value),
            ))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            print(f"[WARN] Ignoring malformed Prometheus result {item!r}: {exc}")
    return samples


def query_prometheus(query: str) -> List[MetricSample]:
    if not PROMETHEUS_QUERY_URL:
        raise MetricQueryError("PROMETHEUS_QUERY_URL is not configured")

    try:
        resp = requests.get(PROMETHEUS_QUERY_URL, params={'query': query}, timeout=HTTP_TIMEOUT_SECONDS)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        raise MetricQueryError(f"request to Prometheus failed: {exc}") from exc
    except ValueError as exc:
        raise MetricQueryError(f"invalid JSON from Prometheus: {exc}") from exc

    if DEBUG_MODE:
        print(f"[DEBUG] Prometheus query={query!r} response={str(data)[:500]}")
    return parse_query_response(data)


def _format_sample(sample: MetricSample) -> str:
    value = float(sample.value)
    # Prometheus sends NaN/+Inf as strings float() accepts
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {sample.value!r}")
    return CPU_USAGE_TEXT.format(value=value)


def get_cpu_usage_text(instance: str) -> str:
    """Current CPU utilisation of ``instance`` as display text, or "" on any failure."""
    try:
        samples = query_prometheus(build_cpu_usage_query(instance))
    except MetricQueryError as exc:
        print(f"[ERROR] CPU usage lookup for {instance!r} failed: {exc}")
        return ""

    rendered = []
    for sample in samples:
        try:
            text = _format_sample(sample)
        except ValueError:
            print(f"[ERROR] Unusable value {sample.value!r} for instance {sample.instance!r}")
            continue
        if sample.instance == instance:
            return text
        rendered.append((sample.instance, text))

    if not rendered:
        if DEBUG_MODE:
            print(f"[DEBUG] No CPU usage sample for {instance!r}")
        return ""
    if len(rendered) == 1:
        return rendered[0][1]
    return "; ".join(f"{inst} {text}" for inst, text in rendered)
