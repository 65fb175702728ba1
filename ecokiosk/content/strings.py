"""
EcoKiosk — UI String Tables

One label set per kiosk language. The controller never reads these;
only the display surface looks them up by language.
"""

from ecokiosk.state.session import Language

TRANSLATION_KEYS = (
    "welcome",
    "subtitle",
    "scanCard",
    "scanCardSub",
    "selectMaterial",
    "plastic",
    "paper",
    "insertItems",
    "currentPoints",
    "count",
    "confirm",
    "processing",
    "successTitle",
    "successMessage",
    "simulatedSensor",
    "paperComingSoon",
)

TEXTS: dict[Language, dict[str, str]] = {
    Language.AZE: {
        "welcome": "Xoş Gəlmisiniz",
        "subtitle": "Təbiəti qoruyun, gələcəyi qazanın",
        "scanCard": "Kartınızı Oxudun",
        "scanCardSub": "Davam etmək üçün kartı terminala yaxınlaşdırın",
        "selectMaterial": "Tullantı Növünü Seçin",
        "plastic": "Plastik",
        "paper": "Kağız",
        "insertItems": "Tullantıları Daxil Edin",
        "currentPoints": "Cari Xal",
        "count": "Say",
        "confirm": "Təsdiq Et",
        "processing": "Hesablanır...",
        "successTitle": "Uğurla Tamamlandı",
        "successMessage": "Xallar hesabınıza uğurla yükləndi.",
        "simulatedSensor": "Simulyasiya: Cihaz",
        "paperComingSoon": "Tezliklə...",
    },
    Language.ENG: {
        "welcome": "Welcome",
        "subtitle": "Protect nature, earn the future",
        "scanCard": "Scan Your Card",
        "scanCardSub": "Tap your card on the reader to continue",
        "selectMaterial": "Select Material Type",
        "plastic": "Plastic",
        "paper": "Paper",
        "insertItems": "Insert Items",
        "currentPoints": "Current Points",
        "count": "Count",
        "confirm": "Confirm",
        "processing": "Processing...",
        "successTitle": "Successfully Completed",
        "successMessage": "Points have been successfully loaded to your account.",
        "simulatedSensor": "Simulation: Sensor",
        "paperComingSoon": "Coming Soon...",
    },
    Language.RU: {
        "welcome": "Добро пожаловать",
        "subtitle": "Берегите природу, зарабатывайте будущее",
        "scanCard": "Сканируйте карту",
        "scanCardSub": "Приложите карту к терминалу для продолжения",
        "selectMaterial": "Выберите тип отходов",
        "plastic": "Пластик",
        "paper": "Бумага",
        "insertItems": "Вставьте предметы",
        "currentPoints": "Текущие баллы",
        "count": "Количество",
        "confirm": "Подтвердить",
        "processing": "Обработка...",
        "successTitle": "Успешно завершено",
        "successMessage": "Баллы успешно зачислены на ваш счет.",
        "simulatedSensor": "Симуляция: Датчик",
        "paperComingSoon": "Скоро...",
    },
}


def get_strings(language: Language) -> dict[str, str]:
    """Label set for a language. Accepts the enum or its code ("eng")."""
    return TEXTS[Language(language)]
