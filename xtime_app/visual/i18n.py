"""UI labels for the supported languages (English default, Turkish)."""

from __future__ import annotations

LABELS: dict[str, dict[str, str]] = {
    "en": {
        "dashboard": "Dashboard",
        "timer": "Timer",
        "settings": "Settings",
        "today_effort": "Today's effort",
        "week_effort": "This week's effort",
        "month_effort": "This month's effort",
        "weekly": "Weekly",
        "monthly": "Monthly",
        "previous_week": "< Previous week",
        "previous_month": "< Previous month",
        "this_week": "This week",
        "this_month": "This month",
        "next_week": "Next week >",
        "next_month": "Next month >",
        "statistics": "Statistics",
        "project_distribution": "Project distribution",
        "my_tickets": "My tickets",
        "no_tickets": "You have no open tickets.",
        "refresh": "Check now",
        "source_connected": "Data source: Jira (connected)",
        "source_mock": "Data source: placeholder. Real data appears once Jira is connected.",
        "no_account": "No account found. Add a Jira account in Settings.",
        "worklogs": "Worklogs",
        "start": "Start",
        "stop": "Stop",
        "save_worklog": "Save worklog",
        "discard": "Discard",
        "elapsed": "Elapsed time",
        "issue_key": "Issue key",
        "description": "Description",
        "template": "Template",
        "hours_override": "Log hours instead (e.g. 1,5)",
        "saved": "Worklog saved",
        "language": "Language",
        "theme": "Theme",
        "privacy_mode": "Privacy mode (hide data on screen)",
        "notifications": "Daily reminder",
        "notification_time": "Reminder time",
        "autostart": "Start with the system",
        "templates": "Quick-log templates",
        "add_template": "Add template",
        "accounts": "Jira accounts",
        "add_account": "Add account",
        "delete": "Delete",
        "soft_clear": "Soft clear cache",
        "hard_reset": "Hard reset data",
    },
    "tr": {
        "dashboard": "Panel",
        "timer": "Zamanlayıcı",
        "settings": "Ayarlar",
        "today_effort": "Bugünlük efor",
        "week_effort": "Bu haftalık efor",
        "month_effort": "Bu aylık efor",
        "weekly": "Haftalık",
        "monthly": "Aylık",
        "previous_week": "< Önceki hafta",
        "previous_month": "< Önceki ay",
        "this_week": "Bu hafta",
        "this_month": "Bu ay",
        "next_week": "Sonraki hafta >",
        "next_month": "Sonraki ay >",
        "statistics": "İstatistikler",
        "project_distribution": "Proje dağılımı",
        "my_tickets": "Üzerimdeki ticket'lar",
        "no_tickets": "Üzerinde açık ticket bulunmuyor.",
        "refresh": "Manuel kontrol et",
        "source_connected": "Veri kaynağı: Jira (bağlı)",
        "source_mock": "Veri kaynağı: örnek. Jira bağlandığında gerçek veriler gösterilecek.",
        "no_account": "Hesap bulunamadı. Lütfen ayarlardan bir Jira hesabı ekleyin.",
        "worklogs": "Efor kayıtları",
        "start": "Başlat",
        "stop": "Durdur",
        "save_worklog": "Efor kaydet",
        "discard": "Vazgeç",
        "elapsed": "Geçen süre",
        "issue_key": "Issue key",
        "description": "Açıklama",
        "template": "Şablon",
        "hours_override": "Bunun yerine saat gir (örn. 1,5)",
        "saved": "Efor kaydedildi",
        "language": "Dil",
        "theme": "Tema",
        "privacy_mode": "Gizlilik modu (ekranda verileri gizle)",
        "notifications": "Günlük hatırlatma",
        "notification_time": "Hatırlatma saati",
        "autostart": "Sistemle başlat",
        "templates": "Hızlı kayıt şablonları",
        "add_template": "Şablon ekle",
        "accounts": "Jira hesapları",
        "add_account": "Hesap ekle",
        "delete": "Sil",
        "soft_clear": "Yumuşak cache temizle",
        "hard_reset": "Tüm veriyi sıfırla",
    },
}


def t(key: str, language: str = "en") -> str:
    table = LABELS.get(language) or LABELS["en"]
    return table.get(key) or LABELS["en"].get(key, key)
