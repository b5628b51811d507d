"""
Logger configuration for the overlap_merge package.
"""
import os
import logging
from typing import Optional
from rich.logging import RichHandler
from rich.console import Console

def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Set up logging configuration for the package.
    
    Args:
        verbose (bool): Enable verbose logging (debug-level and INFO messages)
        log_file (str, optional): Path to log file
    """
    # Notes such as "no atoms were merged" are INFO, so they stay visible by default
    level = logging.DEBUG if verbose else logging.INFO
    
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if (verbose or log_file) else logging.INFO)
    
    # Remove existing handlers to avoid duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    
    # Logs go to stderr; stdout may carry the MOL2 output
    log_console = Console(stderr=True)
    
    console_handler = RichHandler(
        console=log_console,
        rich_tracebacks=True,
        show_time=verbose,
        show_path=verbose,
        markup=False,
        log_time_format="[%X]" if verbose else None,
        omit_repeated_times=True,
        level=level
    )
    root_logger.addHandler(console_handler)
    
    # File handler if specified (this will always have detailed logs)
    if log_file:
        os.makedirs(os.path.dirname(log_file) or '.', exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(file_handler)
        
    if not verbose:
        for module in ['joblib']:
            logging.getLogger(module).setLevel(logging.WARNING)

def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name or 'overlap_merge')

logger = get_logger('overlap_merge')
