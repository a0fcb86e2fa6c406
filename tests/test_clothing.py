import pytest

from cyberdom.clothing import (
    ClothingAttribute,
    ClothingForm,
    ClothingItem,
    MissingNameError,
    validate_cloth_type,
)


def test_attribute_lookup_defaults_to_empty():
    item = ClothingItem("Shirt", "Top")
    item.add_attribute("Colour", "red")
    assert item.get_attribute("Colour") == "red"
    assert item.get_attribute("Size") == ""


def test_to_string_is_compact_sorted_json():
    item = ClothingItem("Shirt", "Top")
    item.add_attribute("Colour", "red")
    assert item.to_string() == '{"attributes":{"Colour":"red"},"name":"Shirt","type":"Top"}'


def test_round_trip():
    item = ClothingItem("Skirt", "Bottom")
    item.add_attribute("Style", "pleated")
    item.add_attribute("Colour", "black")
    assert ClothingItem.from_string(item.to_string()) == item


def test_from_string_bad_input_gives_empty_item():
    assert ClothingItem.from_string("not json") == ClothingItem()
    assert ClothingItem.from_string("[1, 2]") == ClothingItem()


def test_from_string_non_text_values_become_empty():
    item = ClothingItem.from_string('{"name": 5, "type": "Top", "attributes": {"a": 1}}')
    assert item.name == ""
    assert item.type == "Top"
    assert item.get_attribute("a") == ""
    assert "a" in item.attributes


def test_default_form_attributes():
    form = ClothingForm("Top")
    assert [a.name for a in form.attributes] == ["Colour", "Style", "Description"]
    assert form.is_edit is False


def test_submit_builds_item_and_skips_blank_values():
    form = ClothingForm("  Top ")
    item = form.submit("  Shirt ", {"Colour": " red ", "Style": "   "})
    assert item.name == "Shirt"
    assert item.type == "Top"
    assert item.attributes == {"Colour": "red"}


def test_submit_requires_name():
    with pytest.raises(MissingNameError):
        ClothingForm("Top").submit("   ")


def test_choice_attribute_defaults_to_first_choice():
    attrs = [ClothingAttribute("Colour", ["red", "blue"])]
    item = ClothingForm("Top", attrs).submit("Shirt")
    assert item.get_attribute("Colour") == "red"


def test_choice_attribute_rejects_other_values():
    attrs = [ClothingAttribute("Colour", ["red", "blue"])]
    with pytest.raises(ValueError):
        ClothingForm("Top", attrs).submit("Shirt", {"Colour": "green"})


def test_unknown_attribute_rejected():
    with pytest.raises(ValueError):
        ClothingForm("Top").submit("Shirt", {"Size": "M"})


def test_edit_form_starts_from_existing_item():
    existing = ClothingItem("Shirt", "Top", {"Colour": "blue", "Style": "plain"})
    attrs = [ClothingAttribute("Colour", ["red", "blue"]), ClothingAttribute("Style")]
    form = ClothingForm("Top", attrs, existing)
    assert form.is_edit is True
    assert form.initial_name == "Shirt"
    assert form.initial_values() == {"Colour": "blue", "Style": "plain"}
    assert form.submit(form.initial_name) == existing


def test_validate_cloth_type():
    assert validate_cloth_type("  Shoes ") == "Shoes"
    with pytest.raises(MissingNameError):
        validate_cloth_type("  ")