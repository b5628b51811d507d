"""
Input/output for overlap_merge package.
"""

from .mol2 import parse_mol2, read_mol2, format_result

__all__ = ['parse_mol2', 'read_mol2', 'format_result']
