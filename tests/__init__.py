"""Test suite for the campaign intake form runtime.

This package contains tests for:
- Draft model, JSON Schema shape checks, and settings
- Validation engine (rule tables, dates, attachments, labels)
- Form state store and phase machine
- Notification channel
- Multipart serialization and submission controller
- Session scenarios (validation failure, success, network failure)
"""
