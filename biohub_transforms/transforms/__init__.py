"""Submission transform functions.

Each transform is a pure, single-pass mapping over a JSON value:
- eml_xml: Decode an EML XML document into its JSON tree
- eml_metadata: Flatten EML into a search-index summary
- geographic_coverage: EML coverage polygons to GeoJSON boundaries / centroid
- dwc_occurrences: Darwin Core records to occurrence point features
- security: Persecution/harm masking of occurrence spatial payloads
"""
