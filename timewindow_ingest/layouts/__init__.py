"""
Layout definitions sub-package for timewindow-ingest.

Contains YAML files that describe each supported tabular row layout
(column count, title, example rows). The loader module
(layout_registry.py in the parent package) reads these files at runtime.
"""
