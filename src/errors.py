"""
Custom exceptions for the family tree pipeline
"""


class GenealogyError(Exception):
    """Base exception for family tree errors"""
    pass

class RecordError(GenealogyError, ValueError):
    """Raised when a person record cannot be read (missing or bad id)"""
    pass

class AnchorError(GenealogyError):
    """Raised when no generation-zero anchor can be chosen"""
    pass

class GenerationConflictError(GenealogyError):
    """Raised when two children propose different generations for one parent"""
    pass
