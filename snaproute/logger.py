"""
Logging configuration for the SnapRoute itinerary engine
"""

import logging
import os
import sys
from typing import Optional

from .config import config


class SnapRouteLogger:
    """Centralized logging for the SnapRoute itinerary engine"""
    
    def __init__(self, name: str = "snaproute.engine", level: str = "INFO", log_file: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        
        # Prevent duplicate handlers
        if not self.logger.handlers:
            self._setup_handlers(log_file)
    
    def _setup_handlers(self, log_file: Optional[str]):
        """Setup console and optional file handlers"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_format = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(console_format)
        self.logger.addHandler(console_handler)
        
        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_format = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
            )
            file_handler.setFormatter(file_format)
            self.logger.addHandler(file_handler)
    
    def info(self, message: str):
        """Log info message"""
        self.logger.info(message)
    
    def debug(self, message: str):
        """Log debug message"""
        self.logger.debug(message)
    
    def warning(self, message: str):
        """Log warning message"""
        self.logger.warning(message)
    
    def error(self, message: str):
        """Log error message"""
        self.logger.error(message)
    
    def log_route_request(self, origin: tuple, destination: tuple, options: int,
                          duration_ms: float, success: bool):
        """Log itinerary request metrics"""
        self.info(f"Itinerary request: {origin} -> {destination}, options={options}, "
                  f"duration={duration_ms:.2f}ms, success={success}")
    
    def log_api_call(self, api_name: str, duration_ms: float, success: bool):
        """Log API call metrics"""
        self.info(f"API call: {api_name}, duration={duration_ms:.2f}ms, success={success}")


# Global logger instance
logger = SnapRouteLogger(level=config.log_level, log_file=config.log_file)
