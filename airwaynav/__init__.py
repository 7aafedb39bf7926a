"""CT volume reading, slice selection, airway surface geometry, camera, zoom and logging tools."""

__version__ = "0.1.0"

__all__ = [
    "airway_tree",
    "camera",
    "ctvolume",
    "glerrors",
    "logger",
    "navigator",
    "slice_view",
    "slicers",
    "zoom",
]