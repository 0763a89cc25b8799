"""
Configuration management for the SnapRoute itinerary engine
"""

import os
from typing import Optional


WALKING_PROVIDERS = ('ors', 'mapbox')


class Config:
    """Configuration class for the SnapRoute itinerary engine"""
    
    def __init__(self):
        # Transit network (GeoJSON FeatureCollection)
        self.transit_network_path: str = os.getenv('TRANSIT_NETWORK_PATH', 'data/transit-lines.json')
        
        # Walking route service
        self.walking_provider: str = os.getenv('WALKING_PROVIDER', 'ors').lower()
        self.ors_api_key: Optional[str] = os.getenv('ORS_API_KEY')
        self.mapbox_token: Optional[str] = os.getenv('MAPBOX_TOKEN')
        self.walking_timeout: float = float(os.getenv('WALKING_TIMEOUT', '10'))
        
        # Orchestration
        self.max_workers: int = int(os.getenv('MAX_WORKERS', '6'))
        
        # API configuration
        self.host: str = os.getenv('HOST', '0.0.0.0')
        self.port: int = int(os.getenv('PORT', '5000'))
        self.debug: bool = os.getenv('DEBUG', 'False').lower() == 'true'
        
        # Logging
        self.log_level: str = os.getenv('LOG_LEVEL', 'INFO')
        self.log_file: Optional[str] = os.getenv('LOG_FILE')
    
    def validate(self):
        """Validate configuration"""
        if not os.path.exists(self.transit_network_path):
            raise ValueError(f"Transit network file does not exist: {self.transit_network_path}")
        
        if self.walking_provider not in WALKING_PROVIDERS:
            raise ValueError(f"Unknown walking provider: {self.walking_provider}")
        
        if self.walking_timeout <= 0:
            raise ValueError("Walking service timeout must be positive")
        
        if self.max_workers < 1:
            raise ValueError("Max workers must be at least 1")
    
    def get_walking_config(self) -> dict:
        """Get configuration for the walking route service"""
        return {
            'provider': self.walking_provider,
            'ors_api_key': self.ors_api_key,
            'mapbox_token': self.mapbox_token,
            'timeout': self.walking_timeout,
        }
    
    def get_api_config(self) -> dict:
        """Get configuration for Flask API"""
        return {
            'host': self.host,
            'port': self.port,
            'debug': self.debug
        }


# Global configuration instance
config = Config()
