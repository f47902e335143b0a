# tests/conftest.py

import plistlib
import pytest


def _declaration(type_identifier, model_codes=None, description=None, icon_file=None):
    """Builds one UTI declaration the way the system's CoreTypes bundle lays it out."""
    declaration = {"UTTypeIdentifier": type_identifier}
    if model_codes is not None:
        declaration["UTTypeTagSpecification"] = {"com.apple.device-model-code": model_codes}
    if description is not None:
        declaration["UTTypeDescription"] = description
    if icon_file is not None:
        declaration["UTTypeIconFile"] = icon_file
    return declaration


SAMPLE_DECLARATIONS = [
    # Unrelated UTIs: no tags at all, and a tag list with only a SKU.
    _declaration("public.data"),
    _declaration("com.apple.iphone", ["XYZ123-SKU"], "iPhone"),
    _declaration("com.apple.iphone-1", ["M68AP", "iPhone1,1"], "iPhone", "com.apple.iphone.icns"),
    _declaration("com.apple.ipod-touch-5-black", ["iPod5,1"], "iPod touch (5th generation)",
                 "com.apple.ipod-touch-5-black.icns"),
    _declaration("com.apple.ipod-touch-5-white", ["iPod5,1"], "iPod touch (5th generation)",
                 "com.apple.ipod-touch-5-white.icns"),
    _declaration("com.apple.ipad-3", ["J1AP", "iPad3,1"], "iPad 3 (Wi-Fi)"),
    # iPod5,1 shows up again after the iPad; it must keep its first position.
    _declaration("com.apple.ipod-touch-5-blue", ["iPod5,1"], "iPod touch (5th generation)",
                 "com.apple.ipod-touch-5-blue.icns"),
    _declaration("com.apple.watch-38mm-1", ["Watch1,1"], "Apple Watch (38mm)"),
    _declaration("com.apple.watch-38mm-2", ["Watch1,1"], "Apple Watch (38mm)"),
]


@pytest.fixture
def declaration():
    return _declaration


@pytest.fixture
def write_plist(tmp_path):
    """Returns a helper that writes a property list inside a fake bundle and returns its path."""
    def _write(data, fmt=plistlib.FMT_XML):
        contents = tmp_path / "CoreTypes.bundle" / "Contents"
        contents.mkdir(parents=True, exist_ok=True)
        plist_path = contents / "Info.plist"
        with open(plist_path, 'wb') as f:
            plistlib.dump(data, f, fmt=fmt)
        return plist_path
    return _write


@pytest.fixture
def sample_plist(write_plist):
    """A realistic document with devices, colour variants and unrelated UTIs."""
    return write_plist({
        "CFBundleIdentifier": "com.apple.CoreTypes",
        "UTExportedTypeDeclarations": SAMPLE_DECLARATIONS,
    })
