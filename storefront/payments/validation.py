"""
Validation superficielle des coordonnées de paiement.

Aucun contrôle bancaire (pas de Luhn, pas de contrôle de date passée):
seulement la présence des champs requis et leur format apparent.
Les helpers format_* reprennent la mise en forme du formulaire de paiement.
"""
import re
from typing import Dict

from .errors import ValidationError
from .models import PaymentDetails, PaymentMethod

SUPPORTED_WALLETS = ("apple_pay", "google_pay")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")

# module storefront.payments.validation
def digits_only(value: str) -> str:
    return re.sub(r"[^0-9]", "", value or "")

def format_card_number(value: str) -> str:
    """
    Groupe le numéro par blocs de 4 ("4242 4242 4242 4242").
    - Retire tout sauf les chiffres, tronque à 16 chiffres
    - Moins de 4 chiffres: renvoyés tels quels
    """
    v = digits_only(value)
    match = v[:16]
    if len(match) < 4:
        return v
    return " ".join(match[i:i + 4] for i in range(0, len(match), 4))

def format_expiry_date(value: str) -> str:
    """Insère le séparateur MM/YY dès que 2 chiffres sont saisis."""
    v = digits_only(value)
    if len(v) >= 2:
        return v[:2] + "/" + v[2:4]
    return v

def sanitize_cvc(value: str) -> str:
    return digits_only(value)[:4]

def _require(errors: Dict[str, str], details: PaymentDetails, name: str, label: str) -> str:
    value = (getattr(details, name) or "").strip()
    if not value:
        errors[name] = f"{label} est requis"
    return value

def _check_email(errors: Dict[str, str], details: PaymentDetails) -> str:
    email = _require(errors, details, "email", "L'adresse email")
    if email and not _EMAIL_RE.match(email):
        errors["email"] = "Adresse email invalide"
    return email

def _validate_card(details: PaymentDetails) -> PaymentDetails:
    errors: Dict[str, str] = {}
    email = _check_email(errors, details)
    name = _require(errors, details, "cardholder_name", "Le nom du titulaire")
    raw_number = _require(errors, details, "card_number", "Le numéro de carte")
    raw_expiry = _require(errors, details, "expiry", "La date d'expiration")
    raw_cvc = _require(errors, details, "cvc", "Le CVC")

    number = digits_only(raw_number)
    if raw_number and not 12 <= len(number) <= 19:
        errors["card_number"] = "Numéro de carte invalide"
    expiry = format_expiry_date(raw_expiry)
    if raw_expiry and not _EXPIRY_RE.match(expiry):
        errors["expiry"] = "Date d'expiration invalide (MM/YY)"
    cvc = digits_only(raw_cvc)
    if raw_cvc and not 3 <= len(cvc) <= 4:
        errors["cvc"] = "CVC invalide"

    if errors:
        raise ValidationError(fields=errors)
    return details.model_copy(update={
        "email": email,
        "cardholder_name": name,
        "card_number": number,
        "expiry": expiry,
        "cvc": cvc,
    })

def _validate_wallet(details: PaymentDetails) -> PaymentDetails:
    errors: Dict[str, str] = {}
    email = _check_email(errors, details)
    wallet = (details.wallet or "").strip().lower()
    if not wallet:
        errors["wallet"] = "Le portefeuille est requis"
    elif wallet not in SUPPORTED_WALLETS:
        errors["wallet"] = "Portefeuille non pris en charge"
    if errors:
        raise ValidationError(fields=errors)
    return details.model_copy(update={"email": email, "wallet": wallet})

def _validate_redirect(details: PaymentDetails) -> PaymentDetails:
    errors: Dict[str, str] = {}
    email = _check_email(errors, details)
    return_url = _require(errors, details, "return_url", "L'URL de retour")
    if return_url and not return_url.startswith(("http://", "https://")):
        errors["return_url"] = "URL de retour invalide"
    if errors:
        raise ValidationError(fields=errors)
    return details.model_copy(update={"email": email, "return_url": return_url})

_VALIDATORS = {
    PaymentMethod.CARD: _validate_card,
    PaymentMethod.DIGITAL_WALLET: _validate_wallet,
    PaymentMethod.REDIRECT: _validate_redirect,
}

def validate_payment_details(method: PaymentMethod, details: PaymentDetails) -> PaymentDetails:
    """
    Valide la saisie selon la méthode de paiement choisie.
    Retour: une copie normalisée (chiffres seuls pour carte/CVC, expiry MM/YY).
    Soulève ValidationError(fields={champ: message}) si un champ manque ou est mal formé.
    """
    return _VALIDATORS[PaymentMethod(method)](details)
