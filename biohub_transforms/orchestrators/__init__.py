"""Submission-level orchestration.

Runs every applicable transform for one submission:
1. Decode / extract EML metadata
2. Boundaries + centroid from geographic coverage
3. Darwin Core occurrences → security classification
"""
