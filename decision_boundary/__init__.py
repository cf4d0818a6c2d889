from .lpm_boundary import BoundaryLine, boundary_from_fit, calculate_boundary

__all__ = [
    "BoundaryLine",
    "boundary_from_fit",
    "calculate_boundary",
]
