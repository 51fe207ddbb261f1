"""Complexity Lens tests.

Test Modules:
- test_scanner.py: Character scanner transitions and line scans
- test_boundaries.py: Function boundary engine
- test_decision_points.py: Decision-point extraction and attribution
- test_breakdown.py / test_hierarchy.py / test_naming.py: Report helpers
- test_eslint.py / test_config.py / test_analysis.py: Integration surface
- conftest.py: Shared source fixtures
"""
