# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances for schemargs output."""
from rich.console import Console

from schemargs.themes import get_theme

console = Console(theme=get_theme(), highlight=False)
error_console = Console(theme=get_theme(), highlight=False, stderr=True)
