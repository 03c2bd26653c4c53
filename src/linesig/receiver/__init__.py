"""Webhook receiver service."""
