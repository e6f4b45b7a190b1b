"""
Dataset Page Controller Package

This package provides the view-models a web front-end controller fills from
upstream API responses and hands to the renderer:

- models: page variants and their payload records
- mapper: builders turning API data into page variants
- helpers: dataset URL construction and parsing
- logging_config: queue-based logging setup
"""

__version__ = "1.0.0"
