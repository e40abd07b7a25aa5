"""searchconf -- configuration resolver for an AI search service.

Reads a YAML settings file, overlays environment variables on top of
it, exposes one getter per setting, and writes partial updates back to
the settings file.
"""

__version__ = "0.1.0"
