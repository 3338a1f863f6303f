"""Abstract contracts the services depend on."""

from tff.interfaces.api_client import IFeedFactoryClient

__all__ = ["IFeedFactoryClient"]
