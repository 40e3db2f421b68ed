"""Telemetry and configuration shared by every engine component."""
