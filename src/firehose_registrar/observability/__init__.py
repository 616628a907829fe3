"""
firehose_registrar.observability

Observability package.

Responsibilities:
- Structured logging configuration.
"""

# Package marker.
