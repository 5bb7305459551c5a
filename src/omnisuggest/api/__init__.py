"""OmniSuggest HTTP API."""

from omnisuggest.api.app import create_app

__all__ = ["create_app"]
