from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from birth_quality.domain.species import Species

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


@dataclass(frozen=True)
class AgeReport:
    species: str
    biological_age: float
    equivalent_age: float
    quality: float
    peak_window: tuple[float, float] | None  # None for the legacy mapping


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {escape(message)}")


def _quality_color(quality: float) -> str:
    return "green" if quality > 0 else "red"


def print_age_report(report: AgeReport) -> None:
    console.print(f"Species [bold]{report.species}[/bold], biological age [bold]{report.biological_age:g}[/bold]")
    console.print(f"  Equivalent age: {report.equivalent_age:.2f}")
    if report.peak_window is not None:
        start, end = report.peak_window
        console.print(f"  Peak plateau: {start:.2f}–{end:.2f} biological years")
    color = _quality_color(report.quality)
    console.print(f"  Quality: [{color}]{report.quality:+.1%}[/{color}]")


def print_age_table(species: str, reports: list[AgeReport]) -> None:
    console.print(f"Equivalent ages — [bold]{species}[/bold]")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Bio age", justify="right")
    table.add_column("Equiv age", justify="right")
    table.add_column("Quality", justify="right")
    for r in reports:
        color = _quality_color(r.quality)
        table.add_row(f"{r.biological_age:g}", f"{r.equivalent_age:.2f}", f"[{color}]{r.quality:+.1%}[/{color}]")
    console.print(table)


def print_species_list(species: list[Species]) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Species")
    table.add_column("Adult at", justify="right")
    table.add_column("Life expectancy", justify="right")
    for s in species:
        adult = s.adult_min_age
        table.add_row(s.name, f"{adult:g}" if adult is not None else "—", f"{s.life_expectancy:g}")
    console.print(table)
