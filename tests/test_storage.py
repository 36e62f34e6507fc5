import json

import pytest

from xtime_app.core.config import KEY_LANGUAGE, KEY_THEME
from xtime_app.core.storage import AccountRepository, LocalStore, SettingsStore, normalize_domain


def test_local_store_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "state.json"
    LocalStore(path).set("answer", 42)
    assert LocalStore(path).get("answer") == 42
    assert not list(path.parent.glob(".state-*"))


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", ""])
def test_malformed_state_file_treated_as_empty(tmp_path, content):
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")
    store = LocalStore(path)
    assert store.keys() == []
    store.set("k", "v")
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}


def test_delete_and_clear(tmp_path):
    store = LocalStore(tmp_path / "state.json")
    store.set_many({"a": 1, "b": 2})
    store.delete("a")
    store.delete("missing")
    assert store.keys() == ["b"]
    store.clear()
    assert LocalStore(tmp_path / "state.json").keys() == []


def test_settings_defaults_and_invalid_values(tmp_path):
    store = LocalStore(tmp_path / "state.json")
    store.set_many({KEY_THEME: "neon", KEY_LANGUAGE: "tr"})
    settings = SettingsStore(store).load()
    assert settings.theme == "light"
    assert settings.language == "tr"
    assert settings.notification_time == "17:00"
    assert settings.log_templates == []


def test_settings_update_merges_partial(tmp_path):
    settings = SettingsStore(LocalStore(tmp_path / "state.json"))
    settings.update(theme="dark")
    updated = settings.update(notification_enabled=True, notification_time="09:30")
    assert updated.theme == "dark"
    assert updated.notification_enabled is True
    reloaded = SettingsStore(LocalStore(tmp_path / "state.json")).load()
    assert reloaded.theme == "dark"
    assert reloaded.notification_time == "09:30"


def test_settings_update_rejects_unknown_and_invalid(tmp_path):
    settings = SettingsStore(LocalStore(tmp_path / "state.json"))
    with pytest.raises(KeyError):
        settings.update(colour="red")
    with pytest.raises(ValueError):
        settings.update(notification_time="25:00")
    with pytest.raises(ValueError):
        settings.update(language="de")
    assert settings.update(last_reminder_date=None).last_reminder_date is None


def test_templates_trimmed_deduplicated_and_removable(tmp_path):
    settings = SettingsStore(LocalStore(tmp_path / "state.json"))
    settings.add_template("  Code review ")
    settings.add_template("Code review")
    settings.add_template("   ")
    assert settings.add_template("Standup") == ["Code review", "Standup"]
    assert settings.remove_template("Code review") == ["Standup"]


def test_normalize_domain():
    assert normalize_domain(" https://acme.atlassian.net/ ") == "https://acme.atlassian.net"


def test_accounts_add_activate_remove(tmp_path):
    repo = AccountRepository(LocalStore(tmp_path / "state.json"))
    assert repo.active() is None
    first = repo.add("a@x.com", "https://a.atlassian.net/")
    second = repo.add("b@x.com", "https://b.atlassian.net")
    assert first.domain == "https://a.atlassian.net"
    assert [a.email for a in repo.list_accounts()] == ["a@x.com", "b@x.com"]
    assert repo.active() == second

    repo.set_active(first.id)
    assert repo.active() == first
    repo.remove(first.id)
    assert repo.active() == second
    repo.remove(second.id)
    assert repo.active() is None


def test_accounts_validation(tmp_path):
    repo = AccountRepository(LocalStore(tmp_path / "state.json"))
    with pytest.raises(ValueError):
        repo.add("", "https://a.atlassian.net")
    with pytest.raises(KeyError):
        repo.set_active("nope")
