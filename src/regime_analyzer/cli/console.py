"""Rich console configuration for CLI output."""

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "warning": "yellow",
        "error": "red bold",
        "success": "green",
        "highlight": "magenta",
        "muted": "dim",
        "header": "bold blue",
        "regime": "cyan",
        "currency": "green",
        "currency_negative": "red",
        "best": "green bold",
    }
)

# Results go to stdout, logs to stderr so JSON output stays clean
console = Console(theme=THEME)
err_console = Console(theme=THEME, stderr=True)


def print_error(message: str) -> None:
    """Print an error line."""
    console.print(f"[error]Erro:[/error] {message}")


def print_warning(message: str) -> None:
    console.print(f"[warning]Aviso:[/warning] {message}")


def print_success(message: str) -> None:
    console.print(f"[success]✓[/success] {message}")
