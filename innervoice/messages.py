"""
User-facing strings for every supported language.

Only the text the service itself returns lives here: error messages, the chat
fallback, the chat welcome and mood labels.
"""

from .errors import (
    AuthenticationFailure,
    InnerVoiceError,
    QuotaExceeded,
    RateLimited,
    ServiceUnavailable,
)
from .models import Language, Mood

MESSAGES: dict[Language, dict[str, str]] = {
    Language.EN: {
        "error_occurred": "Failed to generate response. Please try again.",
        "chat_fallback": (
            "I'm sorry, I'm having trouble responding right now. Please try again."
        ),
        "rate_limit": "Rate limit exceeded. Please wait a moment before trying again.",
        "quota_exceeded": (
            "API quota exceeded. Please check your account or try again later."
        ),
        "authentication": "Authentication failed. Please check the configuration.",
        "service_unavailable": (
            "Service is temporarily unavailable. Please try again later."
        ),
        "retry_in_seconds": "Please try again in {seconds} seconds.",
        "welcome": (
            "Hello {name}! I'm your Inner Voice, here to listen and support you. "
            "I understand you're feeling {mood} today. "
            "What would you like to talk about?"
        ),
    },
    Language.TR: {
        "error_occurred": "Yanıt oluşturulamadı. Lütfen tekrar deneyin.",
        "chat_fallback": (
            "Üzgünüm, şu anda yanıt vermekte zorlanıyorum. Lütfen tekrar deneyin."
        ),
        "rate_limit": (
            "İstek sınırı aşıldı. Lütfen bir süre bekledikten sonra tekrar deneyin."
        ),
        "quota_exceeded": (
            "API kotası aşıldı. Lütfen hesabınızı kontrol edin "
            "veya daha sonra tekrar deneyin."
        ),
        "authentication": (
            "Kimlik doğrulama başarısız. Lütfen yapılandırmayı kontrol edin."
        ),
        "service_unavailable": (
            "Hizmet geçici olarak kullanılamıyor. Lütfen daha sonra tekrar deneyin."
        ),
        "retry_in_seconds": "Lütfen {seconds} saniye sonra tekrar deneyin.",
        "welcome": (
            "Merhaba {name}! Ben senin İç Sesin, seni dinlemek ve desteklemek "
            "için buradayım. Bugün {mood} hissettiğini anlıyorum. "
            "Ne hakkında konuşmak istersin?"
        ),
    },
}

MOOD_LABELS: dict[Language, dict[Mood, str]] = {
    Language.EN: {
        Mood.HAPPY: "Happy",
        Mood.SAD: "Sad",
        Mood.ANXIOUS: "Anxious",
        Mood.STRESSED: "Stressed",
        Mood.EXCITED: "Excited",
        Mood.CONFUSED: "Confused",
        Mood.LONELY: "Lonely",
        Mood.GRATEFUL: "Grateful",
        Mood.ANGRY: "Angry",
        Mood.HOPEFUL: "Hopeful",
        Mood.OTHER: "Other",
    },
    Language.TR: {
        Mood.HAPPY: "Mutlu",
        Mood.SAD: "Üzgün",
        Mood.ANXIOUS: "Endişeli",
        Mood.STRESSED: "Stresli",
        Mood.EXCITED: "Heyecanlı",
        Mood.CONFUSED: "Kafası Karışık",
        Mood.LONELY: "Yalnız",
        Mood.GRATEFUL: "Minnettar",
        Mood.ANGRY: "Kızgın",
        Mood.HOPEFUL: "Umutlu",
        Mood.OTHER: "Diğer",
    },
}

_ERROR_KEYS: tuple[tuple[type[InnerVoiceError], str], ...] = (
    (RateLimited, "rate_limit"),
    (QuotaExceeded, "quota_exceeded"),
    (AuthenticationFailure, "authentication"),
    (ServiceUnavailable, "service_unavailable"),
)


def message(language: Language, key: str, **params: object) -> str:
    """Look up a string, falling back to English for missing keys."""
    template = MESSAGES[language].get(key) or MESSAGES[Language.EN][key]
    return template.format(**params) if params else template


def chat_fallback(language: Language) -> str:
    return message(language, "chat_fallback")


def mood_label(mood: Mood, language: Language) -> str:
    return MOOD_LABELS[language][mood]


def error_message(error: Exception, language: Language) -> str:
    """Human-readable explanation of an error, with retry guidance if known."""
    key = "error_occurred"
    for error_type, candidate in _ERROR_KEYS:
        if isinstance(error, error_type):
            key = candidate
            break

    text = message(language, key)
    if isinstance(error, RateLimited) and error.retry_after:
        text = f"{text} {message(language, 'retry_in_seconds', seconds=error.retry_after)}"
    return text
