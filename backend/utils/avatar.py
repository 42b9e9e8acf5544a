"""Generated avatars for people without an uploaded photo."""

from urllib.parse import quote

from backend.config import settings

DICEBEAR_URL = "https://api.dicebear.com/7.x/{style}/svg?seed={seed}"

# Common Persian female first names
FEMALE_NAMES = [
    "نازنین", "امینه", "پارمیس", "پانته", "پانته‌آ", "سارا", "مریم", "زهرا", "فاطمه",
    "نرگس", "مینا", "نیلوفر", "شیما", "شیوا", "پریسا", "پرستو", "آیدا", "الهام",
    "مهسا", "مهناز", "مهشید", "نگار", "نگین", "یاسمن", "یاسمین", "ریحانه", "سحر",
    "شقایق", "غزل", "لیلا", "مونا", "هانیه", "هستی", "کیمیا", "آتنا", "آرزو",
    "بهاره", "بهناز", "پگاه", "ترانه", "درسا", "دنیا", "رها", "روژان", "زینب",
    "ساناز", "سمیرا", "سمیه", "شبنم", "شیرین", "صبا", "طناز", "عسل", "فرناز",
    "فریبا", "کتایون", "گلناز", "ملیکا", "ندا", "نسترن", "نسرین", "نیکی", "هدیه",
]


def is_female(full_name: str) -> bool:
    """Guess from the first name; containment is checked both ways."""
    first_name = full_name.strip().split(" ")[0] if full_name.strip() else ""
    if not first_name:
        return False
    return any(first_name in name or name in first_name for name in FEMALE_NAMES)


def get_avatar_url(name: str, photos: dict[str, str] | None = None) -> str:
    """Participant photo if one is configured, else a DiceBear avatar."""
    photos = settings.participant_photos if photos is None else photos
    if name in photos:
        return photos[name]

    style = "lorelei" if is_female(name) else "micah"
    return DICEBEAR_URL.format(style=style, seed=quote(name, safe=""))
