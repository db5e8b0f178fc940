"""Travel Compositor import for offertes."""

from .importer import import_tc_travel, map_tc_data_to_offerte
from .models import Destination, ImportResult, OfferteItem, result_to_dict
from .services.travel_compositor import TC_MICROSITES, TcImportError

__all__ = [
    "Destination",
    "ImportResult",
    "OfferteItem",
    "TC_MICROSITES",
    "TcImportError",
    "import_tc_travel",
    "map_tc_data_to_offerte",
    "result_to_dict",
]
