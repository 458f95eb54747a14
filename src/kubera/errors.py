from __future__ import annotations


class KuberaError(Exception):
    """Error base de kubera. El CLI la convierte en SystemExit."""


class NoMatchingProfileError(KuberaError):
    """Ningún perfil registrado reconoce el texto del estado de cuenta."""

    def __init__(self, message: str = "Ningún perfil reconoce este estado de cuenta") -> None:
        super().__init__(message)


class TextExtractionError(KuberaError):
    """No se pudo extraer texto del PDF (dañado, cifrado o contraseña incorrecta)."""


class CategorizationError(KuberaError):
    """El servicio de clasificación no responde o devolvió algo que no es JSON."""
