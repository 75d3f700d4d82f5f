"""Localized texts for alert notifications and bot replies"""

DEFAULT_LANGUAGE = "en"

TEXTS = {
    "en": {
        "alerts_notification_title": "Personal alerts for your locations",
        "alerts_checked_at": "Checked at: {time}",
        "alerts_background_title": "Personal alerts are active",
        "alerts_background_text": "Checking air quality every {period} min",
        "alerts_show_button": "📋 Show alerts",
        "alerts_header": "⚠️ <b>Air quality alerts</b>",
        "alerts_line": "{emoji} <b>{location}</b>: {category}/10 ({status})",
        "alerts_sensitive_note": "<i>You belong to a sensitive group: limit outdoor activity.</i>",
        "alerts_none": "✅ No location exceeds your alert level.",
        "alerts_expired": "These alerts are no longer available.",
        "alerts_activated": "🔔 Personal alerts activated.",
        "alerts_deactivated": "🔕 Personal alerts deactivated.",
        "alerts_status": "Personal alerts: <b>{state}</b>\nLevel: {level}/10 every {period} min",
        "position_updated": "📍 Position updated.",
        "current_location": "Current location",
        "index_excellent": "excellent",
        "index_very_good": "very good",
        "index_good": "good",
        "index_fairly_good": "fairly good",
        "index_moderate": "moderate",
        "index_poor": "poor",
        "index_very_poor": "very poor",
        "index_bad": "bad",
        "index_very_bad": "very bad",
        "index_horrible": "horrible",
    },
    "ru": {
        "alerts_notification_title": "Персональные оповещения для ваших мест",
        "alerts_checked_at": "Проверено в: {time}",
        "alerts_background_title": "Персональные оповещения включены",
        "alerts_background_text": "Проверка качества воздуха каждые {period} мин",
        "alerts_show_button": "📋 Показать оповещения",
        "alerts_header": "⚠️ <b>Оповещения о качестве воздуха</b>",
        "alerts_line": "{emoji} <b>{location}</b>: {category}/10 ({status})",
        "alerts_sensitive_note": "<i>Вы относитесь к чувствительной группе: ограничьте время на улице.</i>",
        "alerts_none": "✅ Ни одно место не превышает ваш уровень оповещения.",
        "alerts_expired": "Эти оповещения больше недоступны.",
        "alerts_activated": "🔔 Персональные оповещения включены.",
        "alerts_deactivated": "🔕 Персональные оповещения выключены.",
        "alerts_status": "Персональные оповещения: <b>{state}</b>\nУровень: {level}/10 каждые {period} мин",
        "position_updated": "📍 Местоположение обновлено.",
        "current_location": "Текущее местоположение",
        "index_excellent": "отлично",
        "index_very_good": "очень хорошо",
        "index_good": "хорошо",
        "index_fairly_good": "довольно хорошо",
        "index_moderate": "умеренно",
        "index_poor": "плохо",
        "index_very_poor": "очень плохо",
        "index_bad": "вредно",
        "index_very_bad": "очень вредно",
        "index_horrible": "опасно",
    },
    "kk": {
        "alerts_notification_title": "Сіздің орындарыңызға арналған ескертулер",
        "alerts_checked_at": "Тексерілді: {time}",
        "alerts_background_title": "Жеке ескертулер қосулы",
        "alerts_background_text": "Ауа сапасы әр {period} мин сайын тексеріледі",
        "alerts_show_button": "📋 Ескертулерді көрсету",
        "alerts_header": "⚠️ <b>Ауа сапасы туралы ескертулер</b>",
        "alerts_line": "{emoji} <b>{location}</b>: {category}/10 ({status})",
        "alerts_sensitive_note": "<i>Сіз сезімтал топқа жатасыз: далада болуды шектеңіз.</i>",
        "alerts_none": "✅ Бірде-бір орын ескерту деңгейінен аспайды.",
        "alerts_expired": "Бұл ескертулер енді қолжетімсіз.",
        "alerts_activated": "🔔 Жеке ескертулер қосылды.",
        "alerts_deactivated": "🔕 Жеке ескертулер өшірілді.",
        "alerts_status": "Жеке ескертулер: <b>{state}</b>\nДеңгей: {level}/10, әр {period} мин",
        "position_updated": "📍 Орналасқан жер жаңартылды.",
        "current_location": "Ағымдағы орын",
        "index_excellent": "тамаша",
        "index_very_good": "өте жақсы",
        "index_good": "жақсы",
        "index_fairly_good": "едәуір жақсы",
        "index_moderate": "орташа",
        "index_poor": "нашар",
        "index_very_poor": "өте нашар",
        "index_bad": "зиянды",
        "index_very_bad": "өте зиянды",
        "index_horrible": "қауіпті",
    },
}


def get_text(lang: str, key: str, **kwargs) -> str:
    """
    Get localized text by key

    Falls back to English for unknown languages or missing keys, and to
    the key itself when no translation exists at all.

    Args:
        lang: Language code (en/ru/kk)
        key: Text key
        **kwargs: Format arguments

    Returns:
        Formatted text
    """
    texts = TEXTS.get(lang, TEXTS[DEFAULT_LANGUAGE])
    template = texts.get(key) or TEXTS[DEFAULT_LANGUAGE].get(key, key)
    return template.format(**kwargs) if kwargs else template
