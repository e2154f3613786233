from pathlib import Path
from typing import Annotated

import typer

from birth_quality.cli._logging import configure_logging
from birth_quality.cli._output import AgeReport, print_age_report, print_age_table, print_error, print_species_list
from birth_quality.config_species import HUMAN_SPECIES_NAME, list_species, load_species, resolve_species
from birth_quality.curve import BIRTH_QUALITY_CURVE
from birth_quality.domain.species import Species
from birth_quality.domain.subject import Subject
from birth_quality.equivalence import equivalent_age_for, peak_window, profile_for, resolve_reference
from birth_quality.exceptions import BirthQualityException
from birth_quality.settings import BirthQualitySettings, MappingVariant, create_config, load_settings

app = typer.Typer(name="bq", help="Birth quality lifespan fix — human-equivalent age inspector")

MAX_TABLE_ROWS = 10_000


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Birth quality lifespan fix — human-equivalent age inspector."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_SpeciesArg = Annotated[str, typer.Argument(help="Species name (see `bq species`)")]
_SpeciesFileOpt = Annotated[Path | None, typer.Option("--species-file", help="TOML file with extra species")]
_ConfigOpt = Annotated[str, typer.Option("--config", help="YAML settings file")]
_PreventOpt = Annotated[
    bool | None,
    typer.Option(
        "--prevent-short-lifespan-penalty/--allow-short-lifespan-penalty",
        help="Guarantee a full-width peak for short-lived species",
    ),
]
_AgelessPeakOpt = Annotated[
    bool | None,
    typer.Option("--ageless-at-peak/--no-ageless-at-peak", help="Pin ageless subjects at or before peak quality"),
]
_LegacyOpt = Annotated[bool, typer.Option("--legacy", help="Use the legacy breakpoint mapping")]
_AgelessOpt = Annotated[bool, typer.Option("--ageless", help="Treat the subject as biologically ageless")]


def _fail(message: str) -> typer.Exit:
    print_error(message)
    return typer.Exit(code=1)


def _build_settings(
    config_path: str,
    prevent: bool | None,
    ageless_at_peak: bool | None,
    legacy: bool,
) -> BirthQualitySettings:
    section: dict[str, object] = {}
    if prevent is not None:
        section["prevent_short_lifespan_penalty"] = prevent
    if ageless_at_peak is not None:
        section["ageless_at_peak_birth_quality"] = ageless_at_peak
    if legacy:
        section["variant"] = MappingVariant.LEGACY.value
    overrides = {"birth_quality": section} if section else None
    return load_settings(create_config(yaml_path=config_path, overrides=overrides))


def _load_extra_species(species_file: Path | None) -> dict[str, Species]:
    if species_file is None:
        return {}
    return load_species(species_file)


def _report(subject: Subject, human: Species, settings: BirthQualitySettings) -> AgeReport:
    equivalent_age = equivalent_age_for(subject, human, settings)

    window: tuple[float, float] | None = None
    pinned = subject.is_ageless and settings.ageless_at_peak_birth_quality
    if settings.variant is MappingVariant.RATIO and not pinned:
        profile = profile_for(subject)
        reference = resolve_reference(human)
        if min(profile.race_lifespan, reference.maturation_age, reference.lifespan) > 0:
            window = peak_window(
                profile.race_maturation_age / reference.maturation_age,
                profile.race_lifespan / reference.lifespan,
                settings,
            )

    return AgeReport(
        species=subject.species.name,
        biological_age=subject.biological_age,
        equivalent_age=equivalent_age,
        quality=BIRTH_QUALITY_CURVE.evaluate(equivalent_age),
        peak_window=window,
    )


@app.command()
def age(
    species: _SpeciesArg,
    biological_age: Annotated[float, typer.Argument(help="Biological age in the species' own years")],
    ageless: _AgelessOpt = False,
    prevent_short_lifespan_penalty: _PreventOpt = None,
    ageless_at_peak: _AgelessPeakOpt = None,
    legacy: _LegacyOpt = False,
    species_file: _SpeciesFileOpt = None,
    config: _ConfigOpt = "birth_quality.yaml",
) -> None:
    """Show the human-equivalent age and birth quality for one age."""
    if biological_age < 0:
        raise _fail(f"Biological age must be >= 0, got {biological_age:g}")
    try:
        settings = _build_settings(config, prevent_short_lifespan_penalty, ageless_at_peak, legacy)
        extra = _load_extra_species(species_file)
        target = resolve_species(species, extra)
        human = resolve_species(HUMAN_SPECIES_NAME, extra)
    except BirthQualityException as e:
        raise _fail(str(e))

    subject = Subject(
        name=target.name,
        species=target,
        biological_age=biological_age,
        biological_age_tick_factor=0.0 if ageless else 1.0,
    )
    print_age_report(_report(subject, human, settings))


@app.command()
def table(
    species: _SpeciesArg,
    start: Annotated[float, typer.Option(help="First biological age")] = 0.0,
    stop: Annotated[float, typer.Option(help="Last biological age")] = 100.0,
    step: Annotated[float, typer.Option(help="Age increment")] = 5.0,
    ageless: _AgelessOpt = False,
    prevent_short_lifespan_penalty: _PreventOpt = None,
    ageless_at_peak: _AgelessPeakOpt = None,
    legacy: _LegacyOpt = False,
    species_file: _SpeciesFileOpt = None,
    config: _ConfigOpt = "birth_quality.yaml",
) -> None:
    """Tabulate equivalent ages and quality over a range of biological ages."""
    if step <= 0:
        raise _fail(f"--step must be > 0, got {step:g}")
    if start < 0 or stop < start:
        raise _fail(f"Invalid range {start:g}..{stop:g}")
    count = int((stop - start) / step + 1e-9) + 1
    if count > MAX_TABLE_ROWS:
        raise _fail(f"Range {start:g}..{stop:g} by {step:g} gives {count} rows, limit is {MAX_TABLE_ROWS}")
    try:
        settings = _build_settings(config, prevent_short_lifespan_penalty, ageless_at_peak, legacy)
        extra = _load_extra_species(species_file)
        target = resolve_species(species, extra)
        human = resolve_species(HUMAN_SPECIES_NAME, extra)
    except BirthQualityException as e:
        raise _fail(str(e))

    tick_factor = 0.0 if ageless else 1.0
    reports: list[AgeReport] = []
    for i in range(count):
        subject = Subject(
            name=target.name,
            species=target,
            biological_age=start + i * step,
            biological_age_tick_factor=tick_factor,
        )
        reports.append(_report(subject, human, settings))
    print_age_table(target.name, reports)


@app.command(name="species")
def species_cmd(species_file: _SpeciesFileOpt = None) -> None:
    """List known species."""
    try:
        extra = _load_extra_species(species_file)
    except BirthQualityException as e:
        raise _fail(str(e))
    print_species_list(list_species(extra))
