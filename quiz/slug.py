"""Slug - Geracao de slug para o link publico do quiz."""

import random
import re
import string
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 5


def slugify(title: str) -> str:
    """Normaliza o titulo: minusculas, sem acentos, hifens entre palavras.

    >>> slugify("Qual é o seu Perfil de Marketing?")
    'qual-e-o-seu-perfil-de-marketing'
    """
    normalized = unicodedata.normalize("NFD", title.lower())
    without_marks = "".join(c for c in normalized if unicodedata.category(c) != "Mn")
    return _NON_ALNUM.sub("-", without_marks).strip("-")


def random_suffix(length: int = SUFFIX_LENGTH, rng: random.Random | None = None) -> str:
    """Sufixo base36 que evita colisao entre quizzes de mesmo titulo."""
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(_SUFFIX_ALPHABET) for _ in range(length))


def generate_slug(title: str, rng: random.Random | None = None) -> str:
    """Slug unico do quiz: ``<titulo-normalizado>-<5 chars base36>``."""
    base = slugify(title)
    suffix = random_suffix(rng=rng)
    return f"{base}-{suffix}" if base else suffix
