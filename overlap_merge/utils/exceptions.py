"""
Custom exceptions for the overlap_merge package.
"""

class OverlapMergeError(Exception):
    """Base exception class for overlap_merge package."""
    pass

class ConfigurationError(OverlapMergeError):
    """Raised when there is an error in configuration."""
    pass

class InvalidInputError(OverlapMergeError):
    """Raised when input validation fails."""
    pass

class MoleculeFormatError(OverlapMergeError):
    """Raised when a molecule file cannot be read."""
    pass

class ClusteringToolError(OverlapMergeError):
    """Raised when the external clustering tool fails to start, exits abnormally or times out."""
    pass

class ClusterMappingError(OverlapMergeError):
    """Raised when clustering output refers to atoms that do not exist."""
    pass
