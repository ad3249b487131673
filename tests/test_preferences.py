import pytest

from hotline.preferences import Bookmark, Preferences


def test_add_bookmark_appends_in_order():
    prefs = Preferences()
    first = prefs.add_bookmark("one", "one.example.com", "guest", "")
    prefs.add_bookmark("two", "two.example.com:5500", "admin", "password")
    assert prefs.bookmarks[0] == first
    assert [b.addr for b in prefs.bookmarks] == ["one.example.com", "two.example.com:5500"]
    assert prefs.bookmarks[1].password == "password"


def test_apply_settings_empty_name_becomes_unnamed():
    prefs = Preferences(username="someone")
    prefs.apply_settings("", "12", "tracker.example.com", True)
    assert prefs.username == "unnamed"
    assert prefs.icon_id == 12
    assert prefs.tracker == "tracker.example.com"
    assert prefs.enable_bell is True


def test_apply_settings_non_numeric_icon_is_zero():
    prefs = Preferences(icon_id=7)
    prefs.apply_settings("me", "", "", False)
    assert prefs.icon_id == 0
    assert prefs.username == "me"
    assert prefs.enable_bell is False


def test_yaml_round_trip():
    prefs = Preferences(username="me", icon_id=414, tracker="t.example.com", enable_bell=True)
    prefs.add_bookmark("srv", "srv.example.com:5500", "guest", "password")
    assert Preferences.from_yaml(prefs.to_yaml()) == prefs


def test_yaml_uses_capitalised_keys():
    text = Preferences(username="me").to_yaml()
    assert "Username: me" in text


def test_from_yaml_empty_gives_defaults():
    assert Preferences.from_yaml("") == Preferences()


def test_from_yaml_rejects_non_mapping():
    with pytest.raises(ValueError):
        Preferences.from_yaml("- a\n- b\n")


def test_from_yaml_rejects_bad_bookmark():
    with pytest.raises(ValueError):
        Preferences.from_yaml("Bookmarks:\n  - just a string\n")


def test_save_writes_loadable_file(tmp_path):
    path = tmp_path / "config.yaml"
    prefs = Preferences(username="saver", bookmarks=[Bookmark("b", "b.example.com")])
    prefs.save(path)
    assert Preferences.from_yaml(path.read_text(encoding="utf-8")) == prefs


def test_save_to_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        Preferences().save(tmp_path / "missing" / "config.yaml")