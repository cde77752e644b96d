"""margin_tool.core — Foundation layer.

Contains the type definitions, the margin parser, the inset applicator,
.env configuration and the report builder.
This module has NO dependencies on margin_tool.techniques or margin_tool.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
