"""BioHub submission transforms.

Turns the EML metadata and Darwin Core payloads attached to a BioHub
submission into search-index metadata, GeoJSON boundaries, occurrence
features, and persecution/harm security masks.
"""

__version__ = "0.1.0"
