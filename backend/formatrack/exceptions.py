"""
Taxonomie des erreurs métier.

Les services lèvent ces exceptions ; les handlers enregistrés dans main.py
les traduisent en réponse JSON {"error": message} avec le code HTTP associé.
"""

from typing import Optional


class FormaTrackError(Exception):
    status_code = 500
    default_message = "Une erreur interne est survenue."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(FormaTrackError):
    status_code = 401
    default_message = "Token d'accès requis."


class Forbidden(FormaTrackError):
    status_code = 403
    default_message = "Token invalide ou expiré."


class InvalidCredentials(FormaTrackError):
    status_code = 401
    default_message = "Identifiants invalides."


class NotFoundError(FormaTrackError):
    status_code = 404
    default_message = "Ressource introuvable."


class ValidationError(FormaTrackError):
    status_code = 400
    default_message = "Données invalides."


class InvalidPayment(ValidationError):
    default_message = "Montant de paiement invalide."


class SelfDeletionForbidden(FormaTrackError):
    status_code = 400
    default_message = "Vous ne pouvez pas supprimer votre propre compte."


class ConflictError(FormaTrackError):
    status_code = 409
    default_message = "Cette entrée existe déjà."


class ServiceUnavailable(FormaTrackError):
    status_code = 503
    default_message = "Service momentanément indisponible."


class InternalError(FormaTrackError):
    pass
