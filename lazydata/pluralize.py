"""Collection names for sheet and document titles."""

from __future__ import annotations

from typing import Dict

IRREGULAR_PLURALS: Dict[str, str] = {
    "Person": "People",
    "Child": "Children",
    "Man": "Men",
    "Woman": "Women",
    "Mouse": "Mice",
    "Goose": "Geese",
    "Foot": "Feet",
    "Tooth": "Teeth",
    "Cactus": "Cacti",
    "Focus": "Foci",
    "Fungus": "Fungi",
    "Nucleus": "Nuclei",
    "Syllabus": "Syllabi",
    "Analysis": "Analyses",
    "Diagnosis": "Diagnoses",
    "Oasis": "Oases",
    "Thesis": "Theses",
    "Crisis": "Crises",
    "Phenomenon": "Phenomena",
    "Criterion": "Criteria",
    "Datum": "Data",
    "Alumnus": "Alumni",
    "Appendix": "Appendices",
    "Index": "Indices",
    "Matrix": "Matrices",
    "Ox": "Oxen",
    "Vortex": "Vortices",
    "Elf": "Elves",
    "Calf": "Calves",
    "Knife": "Knives",
    "Leaf": "Leaves",
    "Life": "Lives",
    "Wife": "Wives",
    "Wolf": "Wolves",
    "Shelf": "Shelves",
    "Self": "Selves",
    "Loaf": "Loaves",
    "Scarf": "Scarves",
    "Thief": "Thieves",
    "Half": "Halves",
    "Tomato": "Tomatoes",
    "Potato": "Potatoes",
    "Hero": "Heroes",
    "Echo": "Echoes",
    "Torpedo": "Torpedoes",
    "Embryo": "Embryos",
    "Embargo": "Embargoes",
}

_SIBILANT_SUFFIXES = ("s", "sh", "ch", "x", "z", "o")


def pluralize(name: str) -> str:
    """Return the plural of a type name, e.g. ``Person`` -> ``People``.

    Irregular nouns are looked up exactly (case-sensitive); the suffix rules
    compare case-insensitively.
    """

    if not name:
        return name
    if name in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[name]

    lowered = name.lower()
    if lowered.endswith("y") and len(name) > 1 and lowered[-2] not in "aeiou":
        return name[:-1] + "ies"
    if lowered.endswith(_SIBILANT_SUFFIXES):
        return name + "es"
    return name + "s"
