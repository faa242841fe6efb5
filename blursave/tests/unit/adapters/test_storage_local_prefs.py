import json

import pytest

from blursave.adapters.storage_local import StorageLocal
from blursave.viewmodels.settings_vm import AutosaveSettingsVM


def test_missing_file_reads_as_empty(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))

    assert storage.load_user_prefs() == {}
    assert storage.get("blursave.enabled", True) is True
    assert not (tmp_path / "user_prefs.json").exists()


def test_set_persists_and_keeps_other_keys(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    storage.save_user_prefs({"theme": "dark"})

    storage.set("blursave.enabled", False)

    with (tmp_path / "user_prefs.json").open("r", encoding="utf-8") as fh:
        persisted = json.load(fh)
    assert persisted == {"theme": "dark", "blursave.enabled": False}
    assert StorageLocal(root_dir=str(tmp_path)).get("blursave.enabled") is False


def test_root_dir_is_created_on_save(tmp_path):
    root = tmp_path / "nested" / "prefs"
    storage = StorageLocal(root_dir=str(root))

    storage.set("k", 1)

    assert (root / "user_prefs.json").exists()
    assert not (root / "user_prefs.json.tmp").exists()


def test_non_object_payload_is_rejected(tmp_path):
    (tmp_path / "user_prefs.json").write_text("[1, 2]", encoding="utf-8")
    storage = StorageLocal(root_dir=str(tmp_path))

    with pytest.raises(ValueError):
        storage.get("blursave.enabled")


def test_corrupt_file_keeps_toggle_enabled_and_is_replaced_on_write(tmp_path):
    prefs = tmp_path / "user_prefs.json"
    prefs.write_text("{not json", encoding="utf-8")
    storage = StorageLocal(root_dir=str(tmp_path))

    assert AutosaveSettingsVM(storage).load() is True

    storage.set("blursave.enabled", False)

    assert json.loads(prefs.read_text(encoding="utf-8")) == {"blursave.enabled": False}
    assert storage.get("blursave.enabled") is False
