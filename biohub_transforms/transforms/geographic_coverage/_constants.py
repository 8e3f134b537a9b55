"""Shared constants for geographic coverage extraction."""

from __future__ import annotations

# WGS 84 coordinate bounds
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# Minimum vertices for a valid ring (3 distinct + closing = 4)
MIN_RING_VERTICES = 4

# EML coverage paths
PROJECT_COVERAGE_PATH = "$..project.studyAreaDescription..geographicCoverage"
RELATED_PROJECT_COVERAGE_PATH = "$..relatedProject[*].studyAreaDescription..geographicCoverage"
ANY_COVERAGE_PATH = "$..geographicCoverage"
RING_POINTS_PATH = "$..datasetGPolygon[*].datasetGPolygonOuterGRing.gRingPoint"

LATITUDE_KEY = "gRingLatitude"
LONGITUDE_KEY = "gRingLongitude"

# Centroid projection
UTM_ZONE_WIDTH_DEGREES = 6.0
EQUAL_AREA_CRS = "+proj=cea +lon_0=0 +lat_ts=0 +datum=WGS84 +units=m +no_defs"
MAX_SEGMENT_DEGREES = 1.0
