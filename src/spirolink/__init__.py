"""SPIROLINK backend relay: chat completions and contact-form email delivery."""

__version__ = "0.1.0"
