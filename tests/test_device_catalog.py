# tests/test_device_catalog.py

import dataclasses
import plistlib

import pytest

from device_info.core.device_catalog import (
    DeviceDescription, DeviceGroup, SIMULATOR_IDENTIFIER, assemble_descriptions,
    common_prefix, extract_color_suffixes, resolve_devices,
)
from device_info.core.device_scanner import match_device_identifier, scan_declarations
from device_info.core.errors import DocumentReadError, SchemaError
from device_info.core.plist_document import load_document


# --- Colour suffix extraction ---

def test_colors_strip_common_prefix():
    colors = extract_color_suffixes(["com.apple.device-type-blue", "com.apple.device-type-red"])
    assert colors == ["blue", "red"]


def test_single_variant_device_has_no_colors():
    assert extract_color_suffixes(["com.apple.iphone-1"]) == []
    assert extract_color_suffixes([]) == []


def test_empty_suffix_is_kept():
    """An identifier that is itself the prefix produces an empty suffix, not a dropped one."""
    assert common_prefix(["a.b.foo", "a.b.foobar"]) == "a.b.foo"
    assert extract_color_suffixes(["a.b.foo", "a.b.foobar"]) == ["", "bar"]


def test_suffixes_are_neither_sorted_nor_deduplicated():
    assert extract_color_suffixes(["x-red", "x-blue", "x-red"]) == ["red", "blue", "red"]


def test_common_prefix_is_character_exact():
    assert common_prefix(["Apple", "apple"]) == ""
    assert common_prefix(["same", "same"]) == "same"


# --- Device family matching ---

def test_sku_codes_are_filtered_out():
    assert match_device_identifier(["XYZ123-SKU", "iPhone1,2"]) == "iPhone1,2"


def test_first_matching_family_wins():
    assert match_device_identifier(["N90AP", "iPad1,1", "iPhone3,1"]) == "iPad1,1"


def test_no_family_match():
    assert match_device_identifier(["x86_64", "J1AP"]) is None
    assert match_device_identifier([]) is None


def test_every_family_prefix_is_recognised():
    for code in ["iPhone8,1", "iPod9,1", "iPad7,5", "AppleTV5,3", "Watch3,2"]:
        assert match_device_identifier([code]) == code


# --- Grouping ---

def test_group_keeps_first_seen_order():
    group = DeviceGroup()
    group.add("iPod5,1", "t-black")
    group.add("iPad3,1", "t-ipad")
    group.add("iPod5,1", "t-white")

    assert group.order == ["iPod5,1", "iPad3,1"]
    assert group.type_identifiers["iPod5,1"] == ["t-black", "t-white"]
    assert "iPad3,1" in group
    assert len(group) == 2


def test_simulator_is_appended_last():
    group = DeviceGroup()
    group.add("iPhone1,1", "com.apple.iphone-1")
    descriptions = assemble_descriptions(group)

    assert descriptions[-1] == DeviceDescription(SIMULATOR_IDENTIFIER, ())
    assert descriptions[0] == DeviceDescription("iPhone1,1", ())


def test_empty_group_still_has_simulator():
    assert assemble_descriptions(DeviceGroup()) == [DeviceDescription("x86_64", ())]


def test_descriptions_are_immutable():
    description = DeviceDescription("iPhone1,1", ("red",))
    with pytest.raises(dataclasses.FrozenInstanceError):
        description.identifier = "iPhone2,1"


# --- The full pipeline ---

def test_resolve_devices(sample_plist):
    descriptions = resolve_devices(sample_plist)

    assert descriptions == [
        DeviceDescription("iPhone1,1", ()),
        DeviceDescription("iPod5,1", ("black", "white", "blue")),
        DeviceDescription("iPad3,1", ()),
        DeviceDescription("Watch1,1", ("1", "2")),
        DeviceDescription("x86_64", ()),
    ]


def test_resolve_devices_is_repeatable(sample_plist):
    assert resolve_devices(sample_plist) == resolve_devices(sample_plist)


def test_binary_property_lists_are_supported(write_plist, declaration):
    path = write_plist({"UTExportedTypeDeclarations": [
        declaration("com.apple.appletv-4", ["AppleTV5,3"], "Apple TV"),
    ]}, fmt=plistlib.FMT_BINARY)

    assert resolve_devices(path) == [DeviceDescription("AppleTV5,3", ()), DeviceDescription("x86_64", ())]


def test_lone_model_code_string_is_accepted(write_plist, declaration):
    path = write_plist({"UTExportedTypeDeclarations": [
        declaration("com.apple.iphone-3g", "iPhone1,2", "iPhone 3G"),
    ]})

    assert [d.identifier for d in resolve_devices(path)] == ["iPhone1,2", "x86_64"]


def test_scanner_reads_names_and_icons(sample_plist):
    declarations = scan_declarations(load_document(sample_plist))

    assert [d.type_identifier for d in declarations][:2] == ["com.apple.iphone-1", "com.apple.ipod-touch-5-black"]
    assert declarations[0].description == "iPhone"
    assert declarations[0].icon_file == "com.apple.iphone.icns"


# --- Errors ---

def test_missing_declarations_key(write_plist):
    path = write_plist({"CFBundleIdentifier": "com.apple.CoreTypes"})

    with pytest.raises(SchemaError) as exc_info:
        resolve_devices(path)
    assert exc_info.value.key == "UTExportedTypeDeclarations"


def test_declarations_of_wrong_type(write_plist):
    path = write_plist({"UTExportedTypeDeclarations": {"not": "a list"}})

    with pytest.raises(SchemaError) as exc_info:
        resolve_devices(path)
    assert exc_info.value.key == "UTExportedTypeDeclarations"
    assert exc_info.value.expected == "a sequence"
    assert exc_info.value.found == "a mapping"


def test_missing_type_identifier_names_its_path(write_plist, declaration):
    path = write_plist({"UTExportedTypeDeclarations": [
        declaration("com.apple.iphone-1", ["iPhone1,1"]),
        {"UTTypeTagSpecification": {"com.apple.device-model-code": ["iPhone1,2"]}},
    ]})

    with pytest.raises(SchemaError) as exc_info:
        resolve_devices(path)
    assert exc_info.value.key == "UTTypeIdentifier"
    assert exc_info.value.path == "UTExportedTypeDeclarations[1].UTTypeIdentifier"
    assert "UTExportedTypeDeclarations[1].UTTypeIdentifier" in str(exc_info.value)


def test_non_string_model_code(write_plist, declaration):
    path = write_plist({"UTExportedTypeDeclarations": [
        declaration("com.apple.iphone-1", ["iPhone1,1", 5]),
    ]})

    with pytest.raises(SchemaError) as exc_info:
        resolve_devices(path)
    assert exc_info.value.key == "com.apple.device-model-code"


def test_root_must_be_a_mapping(write_plist):
    path = write_plist(["iPhone1,1"])

    with pytest.raises(SchemaError) as exc_info:
        resolve_devices(path)
    assert exc_info.value.key == "<root>"


def test_missing_file(tmp_path):
    with pytest.raises(DocumentReadError) as exc_info:
        resolve_devices(tmp_path / "missing.plist")
    assert isinstance(exc_info.value, OSError)
    assert exc_info.value.path == tmp_path / "missing.plist"


def test_malformed_file(tmp_path):
    path = tmp_path / "Info.plist"
    path.write_bytes(b"this is not a property list")

    with pytest.raises(DocumentReadError):
        resolve_devices(path)


def test_broken_xml(tmp_path):
    path = tmp_path / "Info.plist"
    path.write_bytes(b'<?xml version="1.0"?><plist><dict><key>a</key>')

    with pytest.raises(DocumentReadError):
        resolve_devices(path)


def test_unparseable_date(tmp_path):
    path = tmp_path / "Info.plist"
    path.write_bytes(
        b'<?xml version="1.0" encoding="UTF-8"?>\n'
        b'<plist version="1.0"><dict><key>d</key><date>garbage</date></dict></plist>\n'
    )

    with pytest.raises(DocumentReadError):
        resolve_devices(path)


def test_declaration_that_is_not_a_mapping(write_plist, declaration):
    path = write_plist({"UTExportedTypeDeclarations": [
        declaration("com.apple.iphone-1", ["iPhone1,1"]),
        "com.apple.iphone-2",
    ]})

    with pytest.raises(SchemaError) as exc_info:
        resolve_devices(path)
    assert exc_info.value.key == "UTExportedTypeDeclarations[1]"
    assert exc_info.value.path == "UTExportedTypeDeclarations[1]"
    assert exc_info.value.expected == "a mapping"
    assert exc_info.value.found == "a string"


def test_tag_specification_that_is_not_a_mapping(write_plist):
    path = write_plist({"UTExportedTypeDeclarations": [
        {"UTTypeIdentifier": "com.apple.iphone-1", "UTTypeTagSpecification": ["iPhone1,1"]},
    ]})

    with pytest.raises(SchemaError) as exc_info:
        resolve_devices(path)
    assert exc_info.value.key == "UTTypeTagSpecification"
    assert exc_info.value.path == "UTExportedTypeDeclarations[0].UTTypeTagSpecification"
    assert exc_info.value.found == "a sequence"
