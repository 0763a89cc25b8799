__title__ = 'snaproute'
__version__ = '1.0.0'
__author__ = 'SnapRoute Team'
__license__ = 'MIT'
__copyright__ = 'Copyright 2024 SnapRoute Team'

__all__ = ['core_route_service', 'network_loader', 'config', 'logger', 'exceptions', 'build_itineraries']

# Set default logging handler to avoid "No handler found" warnings.
import logging
from logging import NullHandler

logging.getLogger(__name__).addHandler(NullHandler())

from .core_route_service import build_itineraries  # noqa: E402
