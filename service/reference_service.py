"""
Canonical reference data for the enumeration tables.

The code sets are the values the rest of the system expects to find in the
species, classes, attribute_names and skills tables. `seed_reference_data`
fills an empty (or partially filled) database with them.
"""

from typing import Any

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session

from model.attribute_name import AttributeName
from model.character_class import CharacterClass
from model.skill import Skill
from model.species import Species
from service import logging_service as log
from service.repository_service import execute

logger = log.get_logger(__name__)

SPECIES_CODES = frozenset({
    'elf', 'tiefling', 'human', 'orc', 'halfling',
    'goliath', 'gnome', 'dwarf', 'dragonborn', 'aasimar',
})

CLASS_CODES = frozenset({
    'druid', 'barbarian', 'bard', 'cleric', 'fighter',
    'monk', 'paladin', 'ranger', 'rogue', 'sorcerer', 'warlock', 'wizard',
})

ATTRIBUTE_CODES = frozenset({
    'strength', 'dexterity', 'constitution',
    'intelligence', 'wisdom', 'charisma',
})

SKILL_CODES = frozenset({
    'athletics', 'acrobatics', 'sleight-of-hand', 'stealth',
    'arcana', 'history', 'investigation', 'nature', 'religion',
    'animal-handling', 'insight', 'medicine', 'perception', 'survival',
    'deception', 'intimidation', 'performance', 'persuasion',
})

# character sheet order
ATTRIBUTE_ORDER = ('strength', 'dexterity', 'constitution', 'intelligence', 'wisdom', 'charisma')

SKILL_ATTRIBUTES = {
    'athletics': 'strength',
    'acrobatics': 'dexterity',
    'sleight-of-hand': 'dexterity',
    'stealth': 'dexterity',
    'arcana': 'intelligence',
    'history': 'intelligence',
    'investigation': 'intelligence',
    'nature': 'intelligence',
    'religion': 'intelligence',
    'animal-handling': 'wisdom',
    'insight': 'wisdom',
    'medicine': 'wisdom',
    'perception': 'wisdom',
    'survival': 'wisdom',
    'deception': 'charisma',
    'intimidation': 'charisma',
    'performance': 'charisma',
    'persuasion': 'charisma',
}

CLASS_TRAITS = {
    'barbarian': (12, 'strength'),
    'bard': (8, 'charisma'),
    'cleric': (8, 'wisdom'),
    'druid': (8, 'wisdom'),
    'fighter': (10, 'strength'),
    'monk': (8, 'dexterity'),
    'paladin': (10, 'strength'),
    'ranger': (10, 'dexterity'),
    'rogue': (8, 'dexterity'),
    'sorcerer': (6, 'charisma'),
    'warlock': (8, 'charisma'),
    'wizard': (6, 'intelligence'),
}

SMALL_SPECIES = frozenset({'gnome', 'halfling'})
SPECIES_SPEED = {'goliath': 35}


def display_name(code: str) -> str:
    """'sleight-of-hand' -> 'Sleight of Hand'"""
    words = code.split('-')
    return ' '.join(
        word if i and word in ('of', 'and') else word.capitalize()
        for i, word in enumerate(words)
    )


def reference_rows() -> dict[Any, list[dict[str, Any]]]:
    """Seed rows per table, attribute names first so skills can reference them."""
    return {
        AttributeName.__table__: [
            {
                'code': code,
                'name': display_name(code),
                'abbreviation': code[:3].upper(),
                'display_order': order,
            }
            for order, code in enumerate(ATTRIBUTE_ORDER, start=1)
        ],
        Skill.__table__: [
            {'code': code, 'name': display_name(code), 'attribute_code': SKILL_ATTRIBUTES[code]}
            for code in sorted(SKILL_CODES)
        ],
        Species.__table__: [
            {
                'code': code,
                'name': display_name(code),
                'size': 'small' if code in SMALL_SPECIES else 'medium',
                'speed': SPECIES_SPEED.get(code, 30),
            }
            for code in sorted(SPECIES_CODES)
        ],
        CharacterClass.__table__: [
            {
                'code': code,
                'name': display_name(code),
                'hit_die': CLASS_TRAITS[code][0],
                'primary_ability': CLASS_TRAITS[code][1],
            }
            for code in sorted(CLASS_CODES)
        ],
    }


def seed_reference_data(session: Session) -> dict[str, int]:
    """
    Insert the canonical reference rows, leaving existing rows untouched.

    Returns the number of rows inserted per table.
    """
    inserted = {}
    for table, rows in reference_rows().items():
        statement = sqlite_insert(table).values(rows).on_conflict_do_nothing(index_elements=['code'])
        inserted[table.name] = execute(session, statement)

    logger.info('reference_data_seeded', **inserted)
    return inserted
