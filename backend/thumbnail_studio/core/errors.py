class CompositingEngineError(Exception):
    """Base class for every failure raised by the compositing engine."""


class DecodeError(CompositingEngineError):
    """Raster input could not be decoded."""


class GeometryError(CompositingEngineError):
    """Placement contract violated (non-positive or too small dimensions)."""


class EffectSynthesisError(CompositingEngineError):
    """Blur, grayscale or alpha operation failed on a degenerate raster."""


class CompositingError(CompositingEngineError):
    """Layer stack could not be assembled or flattened."""
