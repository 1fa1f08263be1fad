"""Notification panel and unread-count polling."""
