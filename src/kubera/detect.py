from __future__ import annotations

from typing import Sequence, Tuple

from .banks.base import Profile
from .banks.hdfc_credit import HDFC_CREDIT
from .banks.hdfc_savings import HDFC_SAVINGS
from .errors import NoMatchingProfileError

# El orden decide si un texto cumple con más de un perfil
PROFILES: Tuple[Profile, ...] = (
    HDFC_CREDIT,
    HDFC_SAVINGS,
)


def select_profile(text: str, profiles: Sequence[Profile] = PROFILES) -> Profile:
    """
    Devuelve el primer perfil cuyo patrón de identidad (banco + tipo de cuenta)
    aparece en el texto. Es una detección gruesa, no una validación del documento.
    """
    if text and text.strip():
        for profile in profiles:
            if profile.identify(text):
                return profile
    raise NoMatchingProfileError()
