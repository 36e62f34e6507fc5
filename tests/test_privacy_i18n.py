from xtime_app.visual.i18n import LABELS, t
from xtime_app.visual.privacy import HIDDEN_SUMMARY, mask_domain, mask_email, mask_summary


def test_masking_only_when_enabled():
    assert mask_email("a@x.com", False) == "a@x.com"
    assert mask_email("a@x.com", True) != "a@x.com"
    assert mask_domain("https://x.atlassian.net", True) != "https://x.atlassian.net"
    assert mask_summary("Secret project", True) == HIDDEN_SUMMARY
    assert mask_summary(None, True) == ""
    assert mask_summary(None, False) == ""


def test_languages_share_keys():
    assert set(LABELS["tr"]) == set(LABELS["en"])


def test_lookup_falls_back_to_english_then_key():
    assert t("settings", "tr") == "Ayarlar"
    assert t("settings", "de") == "Settings"
    assert t("not-a-label") == "not-a-label"
