from flask import Flask, request

from .constants import DEBUG_MODE, DINGTALK_MENTION_OWNER, SEND_EMPTY_MESSAGES
from .formatters import format_alert
from .models import PayloadDecodeError, parse_webhook_payload
from .services import send_dingtalk_message


def create_app():
    app = Flask(__name__)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'dingtalk-alert-proxy'}, 200

    @app.route('/webhook', methods=['POST'])
    def webhook():
        body = request.get_data()
        if DEBUG_MODE:
            print(f"[DEBUG] Received data: {body.decode('utf-8', errors='replace')}")

        try:
            batch = parse_webhook_payload(body)
        except PayloadDecodeError as e:
            print(f"[ERROR] Unmarshal err, {e}")
            return {'status': 'error', 'error': str(e)}, 400

        try:
            return handle_alert_batch(batch), 200
        except Exception as e:
            print(f"[ERROR] {str(e)}")
            return {'status': 'error', 'error': str(e)}, 500

    def mentions_for(alert):
        if DINGTALK_MENTION_OWNER and alert.owner:
            return [alert.owner]
        return None

    def handle_alert_batch(batch):
        sent = 0
        skipped = 0
        failed = 0
        # Sequential on purpose: DingTalk must see alerts in Alertmanager order
        for alert in batch.alerts:
            try:
                text = format_alert(batch, alert)
            except Exception as e:
                print(f"[ERROR] Failed to render {alert.alertname!r}: {e}")
                failed += 1
                continue

            if not text and not SEND_EMPTY_MESSAGES:
                if DEBUG_MODE:
                    print(f"[DEBUG] No template for receiver={batch.receiver!r} "
                          f"additionalInfo={alert.additional_info!r} status={alert.status!r}, skipping")
                skipped += 1
                continue

            if DEBUG_MODE:
                print(f"[DEBUG] Sending {alert.alertname} ({alert.status}), content length: {len(text)}")
            try:
                resp = send_dingtalk_message(text, mentions_for(alert))
            except Exception as e:
                print(f"[ERROR] Failed to send {alert.alertname!r}: {e}")
                resp = None
            if resp is not None and resp.ok:
                sent += 1
            else:
                failed += 1

        return {'status': 'ok', 'received': len(batch.alerts), 'sent': sent, 'skipped': skipped, 'failed': failed}

    return app
