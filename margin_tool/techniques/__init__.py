"""Technique modules.

Every .py file in this package that defines a `technique` object is
auto-registered by margin_tool.registry.discover(). Its module docstring
doubles as the `margin-tool help <technique>` text.
"""
