import re
import unicodedata


def normalize_text(text: str) -> str:
    """
    Nettoie une chaîne : trim, unicodes normalisés, espaces réduits.
    """
    if not text:
        return ""
    text = text.strip()
    text = unicodedata.normalize("NFKC", text)
    text = re.sub(r"\s+", " ", text)
    return text


def normalize_query(text: str) -> str:
    """normalize_text + minuscules (comparaisons par sous-chaîne)."""
    return normalize_text(text).lower()
