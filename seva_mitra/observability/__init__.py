"""
Logging and OpenTelemetry tracing setup.
"""
