import json
from pathlib import Path
from typing import Any, Dict, Union

from .exceptions import InvalidFeatureError, NetworkLoadError
from .logger import logger
from .models.route_segments import STOP_SUFFIX, LineFeature, StopFeature, TransitNetwork


def _stop_names(props: Dict[str, Any]):
    names = props.get('stops') or props.get('stop_sequence') or ()
    if not isinstance(names, (list, tuple)):
        raise InvalidFeatureError(f"stop list must be an array, got {type(names).__name__}")
    return tuple(str(n) for n in names)


def parse_feature(feature: Dict[str, Any]) -> Union[LineFeature, StopFeature]:
    """Turn one GeoJSON feature into a LineFeature or StopFeature.

    Raises InvalidFeatureError for anything that is not a transit line or stop.
    """
    if not isinstance(feature, dict):
        raise InvalidFeatureError("feature is not an object")
    geom = feature.get('geometry') or {}
    props = feature.get('properties') or {}
    if not isinstance(geom, dict) or not isinstance(props, dict):
        raise InvalidFeatureError("feature geometry and properties must be objects")
    feature_type = props.get('type')
    if not feature_type:
        raise InvalidFeatureError("feature has no properties.type")

    if geom.get('type') == 'LineString':
        return LineFeature(
            mode=feature_type,
            coordinates=geom.get('coordinates') or (),
            name=props.get('name'),
            stop_names=_stop_names(props),
        )
    if geom.get('type') == 'Point':
        if not str(feature_type).endswith(STOP_SUFFIX):
            raise InvalidFeatureError(f"point feature of type {feature_type!r} is not a stop")
        return StopFeature(stop_type=feature_type, point=geom.get('coordinates'), name=props.get('name'))
    raise InvalidFeatureError(f"unsupported geometry type {geom.get('type')!r}")


def network_from_geojson(geo: Dict[str, Any]) -> TransitNetwork:
    """Build a network from a FeatureCollection, skipping malformed features"""
    if not isinstance(geo, dict) or not isinstance(geo.get('features'), list):
        raise NetworkLoadError("Transit network must be a GeoJSON FeatureCollection")
    lines, stops = [], []
    skipped = 0
    for index, feature in enumerate(geo['features']):
        try:
            parsed = parse_feature(feature)
        except InvalidFeatureError as e:
            skipped += 1
            logger.warning(f"Skipping transit feature {index}: {e}")
            continue
        (lines if isinstance(parsed, LineFeature) else stops).append(parsed)
    logger.info(f"Loaded transit network: {len(lines)} lines, {len(stops)} stops, {skipped} skipped")
    return TransitNetwork(tuple(lines), tuple(stops))


def load_transit_network(path: Union[str, Path]) -> TransitNetwork:
    """Load the transit network from a GeoJSON file"""
    path = Path(path)
    try:
        with path.open('r', encoding='utf-8') as f:
            geo = json.load(f)
    except (OSError, ValueError) as e:
        raise NetworkLoadError(f"Failed to read transit network {path}: {e}") from e
    return network_from_geojson(geo)
