"""
Configuration loading and validation.

Defaults live in frozen dataclasses; a YAML file in the config directory
and explicit overrides are merged on top of them.
"""
