"""
RESPONSIBILITIES
- Minimal Typer CLI demonstrating lazydata on a generated collection of people.
- Round-trips the collection through an Excel file and exports xlsx/docx/pdf copies.
PROCESS OVERVIEW
1. roundtrip -> generate people, save_as_excel, from_excel_file, print what came back.
2. export -> generate people and write them in the requested formats (optional YAML options).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from lazydata import (
    ExportOptions,
    from_excel_file,
    load_options,
    save_as_excel,
    save_as_pdf,
    save_as_word,
)
from lazydata.utils.log import get_logger

app = typer.Typer(help="Round-trip generated records through Excel, Word and PDF documents.")
logger = get_logger("tools.demo_roundtrip")

FIRST_NAMES = ("Ada", "Grace", "Alan", "Edsger", "Barbara", "Donald", "Frances", "Ken", "Radia", "Linus")
LAST_NAMES = ("Lovelace", "Hopper", "Turing", "Dijkstra", "Liskov", "Knuth", "Allen", "Thompson", "Perlman")
STREETS = ("Main St", "Oak Ave", "Maple Rd", "Cedar Ln", "Elm St", "Pine Ct")
WRITERS = {"xlsx": save_as_excel, "docx": save_as_word, "pdf": save_as_pdf}


@dataclass
class Person:
    first_name: str = ""
    last_name: str = ""
    age: int = 0
    email: str = ""
    phone_number: str = ""
    address: str = ""


def random_person(rng: random.Random) -> Person:
    first = rng.choice(FIRST_NAMES)
    last = rng.choice(LAST_NAMES)
    return Person(
        first_name=first,
        last_name=last,
        age=rng.randint(18, 100),
        email=f"{first}.{last}@example.com".lower(),
        phone_number=f"555-{rng.randint(100, 999)}-{rng.randint(1000, 9999)}",
        address=f"{rng.randint(1, 9999)} {rng.choice(STREETS)}",
    )


def generate_people(count: int, seed: Optional[int] = None) -> List[Person]:
    rng = random.Random(seed)
    return [random_person(rng) for _ in range(count)]


@app.command("roundtrip")
def roundtrip_command(
    path: Path = typer.Option(Path("people.xlsx"), help="Workbook to write and read back."),
    count: int = typer.Option(100, min=0, help="Number of people to generate."),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible output."),
) -> None:
    """Save generated people to Excel, read them back and print them."""

    people = generate_people(count, seed)
    written = save_as_excel(people, Person, path)
    restored = from_excel_file(written, Person)
    for person in restored:
        typer.echo(f"{person.first_name} {person.last_name} ({person.age})")
    if restored != people:
        logger.error("Round trip mismatch", extra={"path": str(written)})
        raise typer.Exit(code=1)
    typer.echo(f"Round-tripped {len(restored)} records through {written}")


@app.command("export")
def export_command(
    out_dir: Path = typer.Option(Path("out"), help="Directory for the generated documents."),
    formats: List[str] = typer.Option(["xlsx", "docx", "pdf"], "--format", help="xlsx, docx or pdf."),
    count: int = typer.Option(20, min=0, help="Number of people to generate."),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible output."),
    options_path: Optional[Path] = typer.Option(None, "--options", exists=True, help="YAML export options."),
) -> None:
    """Write generated people in each requested format."""

    unknown = [fmt for fmt in formats if fmt not in WRITERS]
    if unknown:
        raise typer.BadParameter(f"Unsupported format(s): {', '.join(unknown)}")

    options = load_options(options_path) if options_path else ExportOptions()
    people = generate_people(count, seed)
    for fmt in formats:
        target = WRITERS[fmt](people, Person, out_dir / f"people.{fmt}", options=options)
        typer.echo(f"{fmt} written: {target}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
