"""Amazon Location Service sweep category."""

from __future__ import annotations

from cfnctl.sweep.base import ListedCategory, ResourceKind


class LocationCategory(ListedCategory):
    """Maps, trackers, geofence collections, place indexes and route calculators."""

    emoji = "🗺️"
    KINDS = {
        "map": ResourceKind(
            list_method="list_maps",
            result_key="Entries",
            id_key="MapName",
            delete_method="delete_map",
            id_param="MapName",
        ),
        "tracker": ResourceKind(
            list_method="list_trackers",
            result_key="Entries",
            id_key="TrackerName",
            delete_method="delete_tracker",
            id_param="TrackerName",
        ),
        "geofence-collection": ResourceKind(
            list_method="list_geofence_collections",
            result_key="Entries",
            id_key="CollectionName",
            delete_method="delete_geofence_collection",
            id_param="CollectionName",
        ),
        "place-index": ResourceKind(
            list_method="list_place_indexes",
            result_key="Entries",
            id_key="IndexName",
            delete_method="delete_place_index",
            id_param="IndexName",
        ),
        "route-calculator": ResourceKind(
            list_method="list_route_calculators",
            result_key="Entries",
            id_key="CalculatorName",
            delete_method="delete_route_calculator",
            id_param="CalculatorName",
        ),
    }

    @property
    def name(self) -> str:
        return "location"

    @property
    def label(self) -> str:
        return "Amazon Location resources"

    @property
    def service_name(self) -> str:
        return "location"

    @property
    def confirm_message(self) -> str:
        return "Delete ALL Location Service resources?"
