"""
Test package for the Thor Commerce webhook receiver.

- unit/: tests for individual components, grouped by package
"""
