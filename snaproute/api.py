"""
SnapRoute - Flask Web API Blueprint
Multimodal itinerary suggestions for a driving route
"""

import math
import time

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from .config import config
from .core_route_service import build_itineraries
from .logger import logger
from .network_loader import load_transit_network
from .utils.walking_services import make_walking_service

itineraries_bp = Blueprint('itineraries_bp', __name__)


def clean_nan_values(obj):
    """Recursively clean NaN values from objects to make them JSON serializable"""
    if isinstance(obj, dict):
        return {k: clean_nan_values(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [clean_nan_values(item) for item in obj]
    elif isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        return None
    else:
        return obj


@itineraries_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    network = current_app.config.get('TRANSIT_NETWORK')
    if network is None:
        return jsonify({'status': 'error', 'message': 'Transit network not loaded'}), 500
    return jsonify({
        'status': 'healthy',
        'message': 'SnapRoute is running',
        'transit_features': len(network),
        'walking_service': current_app.config.get('WALKING_SERVICE') is not None,
        'timestamp': time.time()
    })


@itineraries_bp.route('/itineraries', methods=['POST'])
def itineraries():
    """Rank transit and driving options for the posted driving route"""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'No data provided'}), 400
    route = data.get('route')
    if not route:
        return jsonify({'error': 'Driving route required'}), 400
    network = current_app.config.get('TRANSIT_NETWORK')
    if network is None:
        return jsonify({'error': 'Transit network not loaded'}), 500

    options = build_itineraries(route, network, current_app.config.get('WALKING_SERVICE'))
    if not options:
        logger.warning("/itineraries: no options generated")
    return jsonify(clean_nan_values({'itineraries': [o.to_dict() for o in options]}))


def create_app(network=None, walking_service=None):
    """Build the Flask app; loads the network and walking service from config when not given"""
    app = Flask(__name__)
    CORS(app)

    if network is None:
        config.validate()
        network = load_transit_network(config.transit_network_path)
    if walking_service is None:
        walking_service = make_walking_service(config.get_walking_config())
        if walking_service is None:
            logger.warning("No walking service credentials configured; transit options disabled")

    app.config['TRANSIT_NETWORK'] = network
    app.config['WALKING_SERVICE'] = walking_service
    app.register_blueprint(itineraries_bp)
    return app
