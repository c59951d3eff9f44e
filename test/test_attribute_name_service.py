import pytest

from service import attribute_name_service
from service.repository_service import RecordValidationError


def test_get_all_ordered_by_display_order(session):
    attribute_name_service.insert_attribute_name(session, {"code": "wisdom", "name": "Wisdom", "display_order": 5})
    attribute_name_service.insert_attribute_name(session, {"code": "strength", "name": "Strength", "display_order": 1})
    attribute_name_service.insert_attribute_name(session, {"code": "charisma", "name": "Charisma", "display_order": 6})

    assert [a["code"] for a in attribute_name_service.get_all(session)] == ["strength", "wisdom", "charisma"]


def test_update_and_delete(session):
    attribute_name_service.insert_attribute_name(session, {"code": "strength", "name": "Strength"})

    assert attribute_name_service.update_attribute_name(
        session, {"code": "strength", "abbreviation": "STR"},
    ) == 1
    assert attribute_name_service.get_by_code(session, {"code": "strength"})["abbreviation"] == "STR"

    assert attribute_name_service.delete_attribute_name(session, {"code": "strength"}) == 1
    assert attribute_name_service.get_by_code(session, {"code": "strength"}) is None


def test_code_must_be_string(session):
    with pytest.raises(RecordValidationError):
        attribute_name_service.get_by_code(session, {"code": 1})
