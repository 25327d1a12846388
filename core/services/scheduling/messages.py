from __future__ import annotations

import os
from datetime import date
from typing import Optional

from core.models import DateAnchor, DependencyType, LinkDirection

DEFAULT_LOCALE = "es"

MESSAGE_TEMPLATES: dict[str, dict[str, str]] = {
    "es": {
        "predecessor.start": (
            "La fecha de inicio no puede ser anterior al requisito de la dependencia"
            "{code} ({dependency}). Debe ser al menos {min_date}."
        ),
        "predecessor.end": (
            "La fecha de fin no puede ser anterior al requisito de la dependencia"
            "{code} ({dependency}). Debe ser al menos {min_date}."
        ),
        "successor.start": (
            "La tarea sucesora{code} no puede iniciar antes de lo que permite esta tarea "
            "({dependency}). La dependencia quedaría incumplida: la sucesora debe iniciar "
            "como mínimo el {min_date}."
        ),
        "successor.end": (
            "La tarea sucesora{code} no puede terminar antes de lo que permite esta tarea "
            "({dependency}). La dependencia quedaría incumplida: la sucesora debe terminar "
            "como mínimo el {min_date}."
        ),
        "predecessor.code": " con {code}",
        "successor.code": " {code}",
        "lag": " {sign} {days} días",
        "date_format": "%d/%m/%Y",
    },
    "en": {
        "predecessor.start": (
            "The start date cannot precede the predecessor constraint"
            "{code} ({dependency}). It must be at least {min_date}."
        ),
        "predecessor.end": (
            "The finish date cannot precede the predecessor constraint"
            "{code} ({dependency}). It must be at least {min_date}."
        ),
        "successor.start": (
            "Successor task{code} cannot start as early as this change allows "
            "({dependency}). Moving this task would break the dependency: the successor "
            "must start on or after {min_date}."
        ),
        "successor.end": (
            "Successor task{code} cannot finish as early as this change allows "
            "({dependency}). Moving this task would break the dependency: the successor "
            "must finish on or after {min_date}."
        ),
        "predecessor.code": " on {code}",
        "successor.code": " {code}",
        "lag": " {sign} {days} days",
        "date_format": "%Y-%m-%d",
    },
}


def resolve_locale(locale: Optional[str] = None) -> str:
    """
    Explicit locale, then PM_SCHEDULE_LOCALE, then the default.
    Region tags ("es-AR", "en_GB") reduce to their language.
    """
    raw = locale if locale is not None else os.getenv("PM_SCHEDULE_LOCALE", DEFAULT_LOCALE)
    normalized = (raw or "").strip().lower().replace("_", "-")
    if normalized in MESSAGE_TEMPLATES:
        return normalized
    language = normalized.split("-", 1)[0]
    if language in MESSAGE_TEMPLATES:
        return language
    return DEFAULT_LOCALE


def format_date(value: date, locale: Optional[str] = None) -> str:
    templates = MESSAGE_TEMPLATES[resolve_locale(locale)]
    return value.strftime(templates["date_format"])


def describe_dependency(
    dependency_type: DependencyType,
    lag_days: int,
    locale: Optional[str] = None,
) -> str:
    """Type code followed by the signed lag, e.g. "FS + 2 días"; lag 0 is omitted."""
    templates = MESSAGE_TEMPLATES[resolve_locale(locale)]
    text = dependency_type.value
    if lag_days:
        text += templates["lag"].format(sign="+" if lag_days > 0 else "-", days=abs(lag_days))
    return text


def violation_message(
    direction: LinkDirection,
    constrained: DateAnchor,
    dependency_type: DependencyType,
    lag_days: int,
    min_date: date,
    code: Optional[str] = None,
    locale: Optional[str] = None,
) -> str:
    key = resolve_locale(locale)
    templates = MESSAGE_TEMPLATES[key]
    code_text = templates[f"{direction.value}.code"].format(code=code) if code else ""
    return templates[f"{direction.value}.{constrained.value}"].format(
        code=code_text,
        dependency=describe_dependency(dependency_type, lag_days, key),
        min_date=format_date(min_date, key),
    )


__all__ = [
    "DEFAULT_LOCALE",
    "MESSAGE_TEMPLATES",
    "resolve_locale",
    "format_date",
    "describe_dependency",
    "violation_message",
]
