"""
Result tabulation for overlap_merge package.
"""

from .dataframe import superatoms_dataframe, export_csv_data, merge_summary_stat

__all__ = ['superatoms_dataframe', 'export_csv_data', 'merge_summary_stat']
