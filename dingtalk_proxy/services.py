import base64
import hashlib
import hmac
import time
from urllib.parse import quote_plus

import requests

from .constants import DINGTALK_WEBHOOK_URL, DINGTALK_SECRET, DEBUG_MODE, HTTP_TIMEOUT_SECONDS
from .models import OutboundMessage


def generate_sign(timestamp_ms, secret):
    string_to_sign = f"{timestamp_ms}\n{secret}"
    digest = hmac.new(secret.encode('utf-8'), string_to_sign.encode('utf-8'), digestmod=hashlib.sha256).digest()
    return base64.b64encode(digest).decode('utf-8')


def build_signed_url(base_url, timestamp_ms, sign):
    separator = '&' if '?' in base_url else '?'
    return f"{base_url}{separator}timestamp={timestamp_ms}&sign={quote_plus(sign)}"


def build_dingtalk_payload(text, at_mobiles=None):
    return OutboundMessage(text=text, at_mobiles=tuple(at_mobiles or ())).to_payload()


def send_dingtalk_message(text, at_mobiles=None):
    """Post one markdown message to the DingTalk robot.

    Best effort: transport errors are printed and swallowed so the caller can
    carry on with the rest of the batch. Returns the response, or None when
    nothing was delivered.
    """
    if not DINGTALK_WEBHOOK_URL:
        print("[ERROR] DINGTALK_WEBHOOK_URL is not configured, dropping message")
        return None

    payload = build_dingtalk_payload(text, at_mobiles)
    url = DINGTALK_WEBHOOK_URL
    if DINGTALK_SECRET:
        timestamp_ms = int(time.time() * 1000)
        url = build_signed_url(url, timestamp_ms, generate_sign(timestamp_ms, DINGTALK_SECRET))

    try:
        resp = requests.post(
            url,
            json=payload,
            headers={'Content-Type': 'application/json'},
            timeout=HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        print(f"[ERROR] Error sending message to DingTalk: {exc}")
        return None

    if DEBUG_MODE:
        try:
            print(f"[DEBUG] DingTalk response: {resp.status_code} errcode={resp.json().get('errcode')}")
        except (ValueError, AttributeError):
            print(f"[DEBUG] DingTalk response: {resp.status_code} {resp.text[:200]}")
    return resp
