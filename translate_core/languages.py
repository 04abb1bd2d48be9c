from __future__ import annotations

from typing import Final

from translate_core.models import AUTO_DETECT_CODE, Language

DEFAULT_SPEECH_LANGUAGE: Final[str] = "English"

SUPPORTED_LANGUAGES: Final[tuple[Language, ...]] = (
    Language(AUTO_DETECT_CODE, "Detect Language", "Detect Language"),
    Language("en", "English", "English"),
    Language("es", "Spanish", "Español"),
    Language("fr", "French", "Français"),
    Language("de", "German", "Deutsch"),
    Language("it", "Italian", "Italiano"),
    Language("pt", "Portuguese", "Português"),
    Language("nl", "Dutch", "Nederlands"),
    Language("ru", "Russian", "Русский"),
    Language("uk", "Ukrainian", "Українська"),
    Language("pl", "Polish", "Polski"),
    Language("cs", "Czech", "Čeština"),
    Language("sv", "Swedish", "Svenska"),
    Language("no", "Norwegian", "Norsk"),
    Language("da", "Danish", "Dansk"),
    Language("fi", "Finnish", "Suomi"),
    Language("el", "Greek", "Ελληνικά"),
    Language("tr", "Turkish", "Türkçe"),
    Language("ar", "Arabic", "العربية"),
    Language("he", "Hebrew", "עברית"),
    Language("fa", "Persian", "فارسی"),
    Language("hi", "Hindi", "हिन्दी"),
    Language("bn", "Bengali", "বাংলা"),
    Language("ur", "Urdu", "اردو"),
    Language("th", "Thai", "ไทย"),
    Language("vi", "Vietnamese", "Tiếng Việt"),
    Language("id", "Indonesian", "Bahasa Indonesia"),
    Language("ms", "Malay", "Bahasa Melayu"),
    Language("tl", "Filipino", "Filipino"),
    Language("zh", "Chinese (Simplified)", "简体中文"),
    Language("zh-TW", "Chinese (Traditional)", "繁體中文"),
    Language("ja", "Japanese", "日本語"),
    Language("ko", "Korean", "한국어"),
    Language("sw", "Swahili", "Kiswahili"),
    Language("ro", "Romanian", "Română"),
    Language("hu", "Hungarian", "Magyar"),
)

_BY_CODE: Final[dict[str, Language]] = {
    language.code: language for language in SUPPORTED_LANGUAGES
}


def find_language(code: str) -> Language | None:
    return _BY_CODE.get(code)


def resolve_language(code: str) -> Language:
    """Return the catalog entry for ``code`` or the first entry when unknown."""
    return _BY_CODE.get(code, SUPPORTED_LANGUAGES[0])


def language_name(code: str, default: str = DEFAULT_SPEECH_LANGUAGE) -> str:
    language = _BY_CODE.get(code)
    if language is None:
        return default
    return language.name


def target_languages() -> tuple[Language, ...]:
    return tuple(language for language in SUPPORTED_LANGUAGES if not language.is_auto)


def is_valid_target(code: str) -> bool:
    return code != AUTO_DETECT_CODE and code in _BY_CODE
