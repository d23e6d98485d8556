"""
errors.py — Failure taxonomy for the rendering pipeline.

Each error carries the HTTP status the route should answer with:

  ValidationError     400  bad or missing query input (caller can fix it)
  SchemaError         500  geometry feature without a usable region id
  GeometryLoadError   500  geometry file missing, unreadable or malformed
  FontLoadError       500  caption font missing or unparsable
  EncodeError         500  rasterisation, text drawing or PNG encoding failed

The app-level handler in main.py answers any MapRenderError with
{"detail": message} and that status; nothing is retried and no partial image is returned.
"""


class MapRenderError(Exception):
    """Base class for every failure that aborts a map render."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MapRenderError):
    status_code = 400


class SchemaError(MapRenderError):
    pass


class ResourceLoadError(MapRenderError):
    """A static file the pipeline depends on could not be read or parsed."""


class GeometryLoadError(ResourceLoadError):
    pass


class FontLoadError(ResourceLoadError):
    pass


class EncodeError(MapRenderError):
    pass
