"""Modular webapp relaying Prometheus Alertmanager notifications to DingTalk.

This package contains:
- constants: environment variables and message labels
- utils: timestamp parsing/formatting helpers
- models: Alertmanager payload decoding and message types
- enrichment: Prometheus instant queries for resolved node alerts
- formatters: markdown templates keyed by receiver/additionalInfo/status
- services: DingTalk robot integration (signing and delivery)
- controller: Flask app creation and endpoints
"""
