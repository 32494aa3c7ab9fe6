"""HubPulse - multi-application health dashboard engine for Anypoint CloudHub."""

__version__ = "0.1.0"
